"""Domain errors raised by the messageboards app.

Every error carries a user-facing ``message``. Not-found errors end up as
404 pages and denials as 403 pages (see :mod:`messageboards.responses`).
"""
from __future__ import annotations

import enum

from django.utils.translation import gettext_lazy as _


class ResourceKind(str, enum.Enum):
    MESSAGEBOARD = "messageboard"
    TOPIC = "topic"
    PRIVATE_TOPIC = "private_topic"
    USER = "user"


class Action(str, enum.Enum):
    READ = "read"
    CREATE = "create"


class MessageboardsError(Exception):
    """Base error with a user-facing message."""

    default_message = _("Something went wrong.")
    code = "error"

    def __init__(self, identifier: object | None = None, message: str | None = None) -> None:
        self.identifier = identifier
        self.message = str(message or self.default_message)
        super().__init__(self.message)


class NotFoundError(MessageboardsError):
    code = "not_found"


class ForbiddenError(MessageboardsError):
    code = "forbidden"


class MessageboardNotFound(NotFoundError):
    default_message = _("This messageboard does not exist.")


class TopicNotFound(NotFoundError):
    default_message = _("This topic does not exist.")


class PrivateTopicNotFound(NotFoundError):
    default_message = _("This private topic does not exist.")


class UserNotFound(NotFoundError):
    default_message = _("This user could not be found. Is their name misspelled?")


class LoginRequired(ForbiddenError):
    code = "login_required"
    default_message = _("Please sign in first.")


class ReadDenied(ForbiddenError):
    code = "read_denied"


class CreateDenied(ForbiddenError):
    code = "create_denied"


class MessageboardReadDenied(ReadDenied):
    default_message = _("You are not authorized to access this messageboard.")


class MessageboardCreateDenied(CreateDenied):
    default_message = _("You are not authorized to create a new messageboard.")


class TopicReadDenied(ReadDenied):
    default_message = _("You are not authorized to read this topic.")


class TopicCreateDenied(CreateDenied):
    default_message = _("You are not authorized to post in this messageboard.")


class PrivateTopicReadDenied(ReadDenied):
    default_message = _("You are not authorized to read this private topic.")


class PrivateTopicCreateDenied(CreateDenied):
    default_message = _("You are not allowed to create a private topic.")


class UserReadDenied(ReadDenied):
    default_message = _("You are not authorized to view this user.")


class UserCreateDenied(CreateDenied):
    default_message = _("You are not authorized to create users.")


DENIALS: dict[tuple[ResourceKind, Action], type[ForbiddenError]] = {
    (ResourceKind.MESSAGEBOARD, Action.READ): MessageboardReadDenied,
    (ResourceKind.MESSAGEBOARD, Action.CREATE): MessageboardCreateDenied,
    (ResourceKind.TOPIC, Action.READ): TopicReadDenied,
    (ResourceKind.TOPIC, Action.CREATE): TopicCreateDenied,
    (ResourceKind.PRIVATE_TOPIC, Action.READ): PrivateTopicReadDenied,
    (ResourceKind.PRIVATE_TOPIC, Action.CREATE): PrivateTopicCreateDenied,
    (ResourceKind.USER, Action.READ): UserReadDenied,
    (ResourceKind.USER, Action.CREATE): UserCreateDenied,
}

NOT_FOUND: dict[ResourceKind, type[NotFoundError]] = {
    ResourceKind.MESSAGEBOARD: MessageboardNotFound,
    ResourceKind.TOPIC: TopicNotFound,
    ResourceKind.PRIVATE_TOPIC: PrivateTopicNotFound,
    ResourceKind.USER: UserNotFound,
}


def denial_for(kind: ResourceKind, action: Action) -> type[ForbiddenError]:
    """Return the denial error class for a resource kind and action."""
    return DENIALS[(ResourceKind(kind), Action(action))]


def not_found_for(kind: ResourceKind) -> type[NotFoundError]:
    return NOT_FOUND[ResourceKind(kind)]
