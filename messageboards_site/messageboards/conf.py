"""Configuration for the messageboards app.

Host projects configure the app through a ``MESSAGEBOARDS`` dict in their
Django settings. The gate never reads settings directly: it is handed a
:class:`GateConfig`, so tests can build independent gates side by side.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

DEFAULTS: dict[str, Any] = {
    "CURRENT_USER_RESOLVER": "messageboards.conf.request_user",
    "LAYOUT": "messageboards/layout.html",
    "MODERATOR_COLUMN": "is_staff",
    "MODERATION_STRATEGY": "messageboards.moderation.ModeratorColumnStrategy",
    "DISPATCHER": "messageboards.dispatch.CeleryDispatcher",
    "ACTIVE_USER_THRESHOLD": 300,
}


def request_user(request) -> Any | None:
    """Default identity resolver: the user set by Django's auth middleware."""
    user = getattr(request, "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return user


def _load(value: Any) -> Any:
    if isinstance(value, str):
        return import_string(value)
    return value


@dataclass(frozen=True)
class GateConfig:
    current_user_resolver: Callable[[Any], Any] = request_user
    layout: str = DEFAULTS["LAYOUT"]
    user_model: str = "auth.User"
    moderator_column: str = DEFAULTS["MODERATOR_COLUMN"]
    moderation_strategy: Any = None
    dispatcher: Any = None
    active_user_threshold: int = DEFAULTS["ACTIVE_USER_THRESHOLD"]

    def __post_init__(self) -> None:
        if self.moderation_strategy is None:
            from messageboards.moderation import ModeratorColumnStrategy

            object.__setattr__(self, "moderation_strategy", ModeratorColumnStrategy(self))
        if self.dispatcher is None:
            from messageboards.dispatch import CeleryDispatcher

            object.__setattr__(self, "dispatcher", CeleryDispatcher())

    @classmethod
    def from_settings(cls, overrides: dict[str, Any] | None = None) -> "GateConfig":
        raw = dict(DEFAULTS)
        raw.update(getattr(settings, "MESSAGEBOARDS", {}) or {})
        raw.update(overrides or {})
        config = cls(
            current_user_resolver=_load(raw["CURRENT_USER_RESOLVER"]),
            layout=raw["LAYOUT"],
            user_model=settings.AUTH_USER_MODEL,
            moderator_column=raw["MODERATOR_COLUMN"],
            dispatcher=_load(raw["DISPATCHER"])(),
            active_user_threshold=int(raw["ACTIVE_USER_THRESHOLD"]),
        )
        strategy_class = _load(raw["MODERATION_STRATEGY"])
        return replace(config, moderation_strategy=strategy_class(config))


_settings_config: GateConfig | None = None


def get_config() -> GateConfig:
    """Return the process-wide config built from Django settings."""
    global _settings_config
    if _settings_config is None:
        _settings_config = GateConfig.from_settings()
    return _settings_config


def clear_cache() -> None:
    global _settings_config
    _settings_config = None


@receiver(setting_changed)
def _reset_on_setting_change(*, setting: str, **kwargs) -> None:
    if setting in {"MESSAGEBOARDS", "AUTH_USER_MODEL"}:
        clear_cache()
