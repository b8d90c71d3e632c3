from __future__ import annotations

from django.test import SimpleTestCase, override_settings

from messageboards import checks, conf
from messageboards.dispatch import CeleryDispatcher, RecordingDispatcher
from messageboards.moderation import ModeratorColumnStrategy, NoModerationStrategy


def _resolver(request):
    return None


class GateConfigTests(SimpleTestCase):
    def tearDown(self) -> None:
        conf.clear_cache()
        super().tearDown()

    @override_settings(MESSAGEBOARDS={})
    def test_defaults(self) -> None:
        config = conf.GateConfig.from_settings()
        self.assertIs(config.current_user_resolver, conf.request_user)
        self.assertEqual(config.layout, "messageboards/layout.html")
        self.assertEqual(config.user_model, "auth.User")
        self.assertEqual(config.moderator_column, "is_staff")
        self.assertEqual(config.active_user_threshold, 300)
        self.assertIsInstance(config.moderation_strategy, ModeratorColumnStrategy)
        self.assertIsInstance(config.dispatcher, CeleryDispatcher)

    @override_settings(
        MESSAGEBOARDS={
            "CURRENT_USER_RESOLVER": "messageboards.tests.test_conf._resolver",
            "LAYOUT": "host/base.html",
            "MODERATOR_COLUMN": "is_superuser",
            "MODERATION_STRATEGY": "messageboards.moderation.NoModerationStrategy",
            "DISPATCHER": "messageboards.dispatch.RecordingDispatcher",
            "ACTIVE_USER_THRESHOLD": "60",
            "HOST_FLAG": True,
        }
    )
    def test_overrides_from_settings(self) -> None:
        config = conf.get_config()
        self.assertIs(config.current_user_resolver, _resolver)
        self.assertEqual(config.layout, "host/base.html")
        self.assertEqual(config.moderator_column, "is_superuser")
        self.assertIsInstance(config.moderation_strategy, NoModerationStrategy)
        self.assertIsInstance(config.dispatcher, RecordingDispatcher)
        self.assertEqual(config.active_user_threshold, 60)
        self.assertFalse(hasattr(config, "host_flag"))

    def test_settings_change_resets_cache(self) -> None:
        before = conf.get_config()
        self.assertIs(before, conf.get_config())
        with override_settings(MESSAGEBOARDS={"LAYOUT": "other.html"}):
            self.assertEqual(conf.get_config().layout, "other.html")
        self.assertIsNot(conf.get_config(), before)

    def test_independent_configs(self) -> None:
        first = conf.GateConfig(moderator_column="is_staff")
        second = conf.GateConfig(moderator_column="is_superuser")
        self.assertEqual(first.moderation_strategy.column, "is_staff")
        self.assertEqual(second.moderation_strategy.column, "is_superuser")


class ModeratorColumnCheckTests(SimpleTestCase):
    @override_settings(MESSAGEBOARDS={"MODERATOR_COLUMN": "is_staff"})
    def test_existing_column_passes(self) -> None:
        self.assertEqual(checks.check_moderator_column(), [])

    @override_settings(MESSAGEBOARDS={"MODERATOR_COLUMN": "is_moderator"})
    def test_missing_column_reported(self) -> None:
        messages = checks.check_moderator_column()
        self.assertEqual([message.id for message in messages], ["messageboards.E001"])

    @override_settings(
        MESSAGEBOARDS={
            "MODERATOR_COLUMN": "is_moderator",
            "MODERATION_STRATEGY": "messageboards.moderation.NoModerationStrategy",
        }
    )
    def test_column_ignored_for_other_strategies(self) -> None:
        self.assertEqual(checks.check_moderator_column(), [])

    @override_settings(MESSAGEBOARDS={"MODERATION_STRATEGY": "messageboards.moderation.Missing"})
    def test_unimportable_strategy_reported(self) -> None:
        messages = checks.check_moderator_column()
        self.assertEqual([message.id for message in messages], ["messageboards.E002"])

    @override_settings(AUTH_USER_MODEL="auth.User", MESSAGEBOARDS={"MODERATOR_COLUMN": "is_active"})
    def test_column_looked_up_on_configured_user_model(self) -> None:
        self.assertEqual(conf.GateConfig.from_settings().user_model, "auth.User")
        self.assertEqual(checks.check_moderator_column(), [])
