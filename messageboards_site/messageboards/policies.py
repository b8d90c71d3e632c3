"""Read/create/moderate rules for each kind of resource.

Policies answer with booleans; :func:`authorize` turns a ``False`` into
Django's generic ``PermissionDenied``. The gate is responsible for giving
that denial a resource-specific type.
"""
from __future__ import annotations

from django.core.exceptions import PermissionDenied

from messageboards.actors import is_anonymous
from messageboards.errors import ResourceKind
from messageboards.models import Messageboard


class Policy:
    def __init__(self, actor, resource, strategy) -> None:
        self.actor = actor
        self.resource = resource
        self.strategy = strategy

    @property
    def signed_in(self) -> bool:
        return not is_anonymous(self.actor)

    def moderates(self, messageboard) -> bool:
        if not self.signed_in or messageboard is None:
            return False
        boards = self.strategy.can_moderate_messageboards(self.actor)
        if messageboard.pk is None:
            return boards.exists()
        return boards.filter(pk=messageboard.pk).exists()

    def read(self) -> bool:
        return True

    def create(self) -> bool:
        return False

    def moderate(self) -> bool:
        return False


def moderates_every_board(actor, strategy) -> bool:
    """True if the strategy lets ``actor`` moderate all boards, present and future."""
    if is_anonymous(actor):
        return False
    if not strategy.moderators_of(Messageboard.objects.all()).filter(pk=actor.pk).exists():
        return False
    boards = strategy.can_moderate_messageboards(actor)
    return not Messageboard.objects.exclude(pk__in=boards.values("pk")).exists()


class MessageboardPolicy(Policy):
    def create(self) -> bool:
        # Creating boards needs moderation rights over every board.
        return moderates_every_board(self.actor, self.strategy)

    def moderate(self) -> bool:
        return self.moderates(self.resource)


class TopicPolicy(Policy):
    def read(self) -> bool:
        board = self.resource.messageboard
        if not MessageboardPolicy(self.actor, board, self.strategy).read():
            return False
        return not self.resource.is_blocked or self.moderates(board)

    def create(self) -> bool:
        if not self.signed_in:
            return False
        board = self.resource.messageboard
        return not board.locked or self.moderates(board)

    def moderate(self) -> bool:
        return self.moderates(self.resource.messageboard)


class PrivateTopicPolicy(Policy):
    def read(self) -> bool:
        return self.resource.has_participant(self.actor)

    def create(self) -> bool:
        return self.signed_in


class UserPolicy(Policy):
    pass


POLICIES: dict[ResourceKind, type[Policy]] = {
    ResourceKind.MESSAGEBOARD: MessageboardPolicy,
    ResourceKind.TOPIC: TopicPolicy,
    ResourceKind.PRIVATE_TOPIC: PrivateTopicPolicy,
    ResourceKind.USER: UserPolicy,
}


def resource_kind_of(resource) -> ResourceKind:
    kind = getattr(resource, "resource_kind", None)
    if kind is not None:
        return ResourceKind(kind)
    from django.contrib.auth import get_user_model

    if isinstance(resource, get_user_model()):
        return ResourceKind.USER
    raise TypeError(f"{type(resource).__name__} does not declare a resource kind")


def policy_for(resource, actor, strategy) -> Policy:
    return POLICIES[resource_kind_of(resource)](actor, resource, strategy)


def authorize(policy: Policy, query: str) -> None:
    """Raise ``PermissionDenied`` unless ``policy.<query>()`` holds."""
    if not getattr(policy, query)():
        raise PermissionDenied(
            f"not allowed to {query} this {type(policy.resource).__name__}"
        )
