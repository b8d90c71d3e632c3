from __future__ import annotations

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class MessageboardsConfig(AppConfig):
    """Configuration for the messageboards app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'messageboards'

    def ready(self) -> None:  # pragma: no cover - startup wiring
        from . import checks  # noqa: F401 - registers system checks

        logger.debug("messageboards app ready")
