from __future__ import annotations

from django.apps import apps
from django.core import checks
from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured

from messageboards.conf import GateConfig
from messageboards.moderation import ModeratorColumnStrategy


@checks.register()
def check_moderator_column(app_configs=None, **kwargs) -> list[checks.CheckMessage]:
    try:
        config = GateConfig.from_settings()
    except ImportError as exc:
        return [
            checks.Error(
                f"MESSAGEBOARDS names a class or function that cannot be imported: {exc}",
                hint="Use dotted paths such as 'messageboards.moderation.ModeratorColumnStrategy'.",
                id="messageboards.E002",
            )
        ]
    if not isinstance(config.moderation_strategy, ModeratorColumnStrategy):
        return []
    try:
        user_model = apps.get_model(config.user_model)
    except (LookupError, ValueError, ImproperlyConfigured):
        return []
    column = config.moderator_column
    try:
        user_model._meta.get_field(column)
    except FieldDoesNotExist:
        return [
            checks.Error(
                f"MESSAGEBOARDS['MODERATOR_COLUMN'] is {column!r}, "
                f"but {user_model.__name__} has no such field.",
                hint="Point it at a boolean field of the user model.",
                id="messageboards.E001",
            )
        ]
    return []
