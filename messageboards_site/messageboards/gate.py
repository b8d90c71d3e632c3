"""Per-request identity, messageboard and permission checks.

A :class:`Gate` is built for every request (see
:class:`messageboards.middleware.MessageboardsGateMiddleware`). It resolves
the acting user and the messageboard named in the URL once, caches both for
the rest of the request, and raises the domain errors from
:mod:`messageboards.errors` when a check fails.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from django.core.exceptions import PermissionDenied

from messageboards import tasks
from messageboards.actors import NullUser, is_anonymous
from messageboards.conf import GateConfig, get_config
from messageboards.errors import Action, LoginRequired, MessageboardNotFound, denial_for
from messageboards.models import Messageboard, UserDetail, UserPreference
from messageboards.policies import authorize, policy_for, resource_kind_of

logger = logging.getLogger(__name__)

MESSAGEBOARD_PARAM = "messageboard_id"

_UNSET = object()


class Gate:
    def __init__(
        self,
        request,
        config: GateConfig | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        self.request = request
        self.config = config or get_config()
        self._params = params
        self._actor: Any = _UNSET
        self._messageboard: Any = _UNSET
        self._preferences: Any = _UNSET

    # Identity ----------------------------------------------------------------

    @property
    def current_user(self):
        return self.resolve_actor()

    def resolve_actor(self):
        if self._actor is _UNSET:
            user = self.config.current_user_resolver(self.request)
            if user is None or is_anonymous(user):
                user = NullUser()
            self._actor = user
        return self._actor

    def signed_in(self, scope: object = None) -> bool:
        # ``scope`` is accepted for authentication add-ons that pass one; it is ignored.
        return not is_anonymous(self.resolve_actor())

    def require_login(self) -> None:
        if not self.signed_in():
            raise LoginRequired()

    def preferences(self) -> UserPreference:
        if self._preferences is _UNSET:
            actor = self.resolve_actor()
            if is_anonymous(actor):
                self._preferences = actor.messageboards_preference
            else:
                self._preferences = (
                    UserPreference.objects.filter(user=actor).first() or UserPreference(user=actor)
                )
        return self._preferences

    @property
    def layout(self) -> str:
        return self.config.layout

    # Messageboard ------------------------------------------------------------

    @property
    def params(self) -> Mapping[str, Any]:
        if self._params is not None:
            return self._params
        match = getattr(self.request, "resolver_match", None)
        if match is not None and MESSAGEBOARD_PARAM in match.kwargs:
            return match.kwargs
        return getattr(self.request, "GET", {})

    def messageboard_or_none(self) -> Messageboard | None:
        if self._messageboard is _UNSET:
            identifier = self.params.get(MESSAGEBOARD_PARAM)
            self._messageboard = Messageboard.objects.friendly_find(identifier)
        return self._messageboard

    def messageboard(self) -> Messageboard:
        """Return the messageboard named by the ``messageboard_id`` parameter.

        Raises :class:`MessageboardNotFound` if no board has that slug or id.
        """
        board = self.messageboard_or_none()
        if board is None:
            raise MessageboardNotFound(self.params.get(MESSAGEBOARD_PARAM))
        return board

    # Authorization -----------------------------------------------------------

    def _authorize(self, resource, action: Action) -> None:
        policy = policy_for(resource, self.resolve_actor(), self.config.moderation_strategy)
        try:
            authorize(policy, action.value)
        except PermissionDenied:
            raise denial_for(resource_kind_of(resource), action)(getattr(resource, "pk", None))

    def authorize_reading(self, resource) -> None:
        self._authorize(resource, Action.READ)

    def authorize_creating(self, resource) -> None:
        self._authorize(resource, Action.CREATE)

    def authorize_moderating(self, resource) -> None:
        # Moderation has no resource-specific denial; the generic one is mapped to 403.
        policy = policy_for(resource, self.resolve_actor(), self.config.moderation_strategy)
        authorize(policy, "moderate")

    def moderatable_messageboards(self):
        actor = self.resolve_actor()
        if is_anonymous(actor):
            return Messageboard.objects.none()
        return self.config.moderation_strategy.can_moderate_messageboards(actor)

    # Activity ----------------------------------------------------------------

    def active_users(self) -> list:
        threshold = self.config.active_user_threshold
        board = self.messageboard_or_none()
        if board is not None:
            users = list(board.recently_active_users(threshold))
        else:
            users = list(UserDetail.recently_active_users(threshold))
        actor = self.resolve_actor()
        if not is_anonymous(actor):
            users.append(actor)
        unique: list = []
        seen: set = set()
        for user in users:
            if user.pk in seen:
                continue
            seen.add(user.pk)
            unique.append(user)
        return unique

    def update_user_activity(self) -> None:
        board = self.messageboard_or_none()
        if board is None or not self.signed_in():
            return
        self.config.dispatcher.schedule(
            tasks.update_user_activity,
            self.resolve_actor().pk,
            board.pk,
        )
