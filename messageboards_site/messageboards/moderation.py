"""Strategies answering "who moderates what".

A strategy is picked by the ``MODERATION_STRATEGY`` setting and handed to the
gate; swapping it changes moderation rights without touching the user model.
"""
from __future__ import annotations

from typing import Iterable, Protocol

from django.contrib.auth import get_user_model
from django.db.models import QuerySet

from messageboards.actors import is_anonymous
from messageboards.models import Messageboard


class ModerationStrategy(Protocol):
    def can_moderate_messageboards(self, actor) -> QuerySet:
        ...

    def moderators_of(self, messageboards: Iterable[Messageboard]) -> QuerySet:
        ...


class ModeratorColumnStrategy:
    """Users whose moderator column is true moderate every board."""

    def __init__(self, config) -> None:
        self.column = config.moderator_column

    def is_moderator(self, actor) -> bool:
        if is_anonymous(actor):
            return False
        return bool(getattr(actor, self.column, False))

    def can_moderate_messageboards(self, actor) -> QuerySet:
        if self.is_moderator(actor):
            return Messageboard.objects.all()
        return Messageboard.objects.none()

    def moderators_of(self, messageboards: Iterable[Messageboard]) -> QuerySet:
        # Board-agnostic: the column grants every board, so the argument is unused.
        return get_user_model().objects.filter(**{self.column: True})


class NoModerationStrategy:
    def __init__(self, config) -> None:
        self.config = config

    def can_moderate_messageboards(self, actor) -> QuerySet:
        return Messageboard.objects.none()

    def moderators_of(self, messageboards: Iterable[Messageboard]) -> QuerySet:
        return get_user_model().objects.none()
