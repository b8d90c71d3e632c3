"""Data models for the messageboards app."""
from __future__ import annotations

from datetime import timedelta
import logging

from django.conf import settings
from django.db import models
from django.utils import timezone

from messageboards.errors import ResourceKind

logger = logging.getLogger(__name__)


def recently_active_cutoff(threshold_seconds: int):
    return timezone.now() - timedelta(seconds=threshold_seconds)


class MessageboardQuerySet(models.QuerySet):
    def friendly_find(self, identifier) -> "Messageboard | None":
        """Find a board by slug, falling back to its numeric id."""
        if identifier in (None, ""):
            return None
        key = str(identifier)
        board = self.filter(slug=key).first()
        if board is None and key.isdigit():
            board = self.filter(pk=int(key)).first()
        return board


class Messageboard(models.Model):
    """A board that scopes topics, activity and permissions."""

    resource_kind = ResourceKind.MESSAGEBOARD

    name = models.CharField(max_length=120, unique=True)
    slug = models.SlugField(max_length=150, unique=True)
    description = models.TextField(blank=True)
    position = models.PositiveIntegerField(default=100, db_index=True)
    locked = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = MessageboardQuerySet.as_manager()

    class Meta:
        ordering = ["position", "name"]

    def __str__(self) -> str:  # pragma: no cover
        return self.name

    def recently_active_users(self, threshold_seconds: int) -> list:
        """Users seen on this board recently, most recent first."""
        activity = (
            self.user_activity.filter(last_seen_at__gt=recently_active_cutoff(threshold_seconds))
            .select_related("user")
            .order_by("-last_seen_at", "user_id")
        )
        return [record.user for record in activity]


class Topic(models.Model):
    resource_kind = ResourceKind.TOPIC

    STATE_APPROVED = "approved"
    STATE_PENDING = "pending_moderation"
    STATE_BLOCKED = "blocked"

    STATE_CHOICES = [
        (STATE_APPROVED, "approved"),
        (STATE_PENDING, "pending moderation"),
        (STATE_BLOCKED, "blocked"),
    ]

    messageboard = models.ForeignKey(Messageboard, on_delete=models.CASCADE, related_name="topics")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="messageboard_topics",
    )
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220)
    locked = models.BooleanField(default=False)
    moderation_state = models.CharField(max_length=20, choices=STATE_CHOICES, default=STATE_APPROVED)
    created_at = models.DateTimeField(auto_now_add=True)
    last_post_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-last_post_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["messageboard", "slug"], name="messageboards_topic_board_slug"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.title

    @property
    def is_blocked(self) -> bool:
        return self.moderation_state == self.STATE_BLOCKED


class Post(models.Model):
    topic = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name="posts")
    messageboard = models.ForeignKey(Messageboard, on_delete=models.CASCADE, related_name="posts")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="messageboard_posts",
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]


class PrivateTopic(models.Model):
    resource_kind = ResourceKind.PRIVATE_TOPIC

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="started_private_topics",
    )
    users = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="private_topics")
    title = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:  # pragma: no cover
        return self.title

    def has_participant(self, user) -> bool:
        if getattr(user, "pk", None) is None:
            return False
        if self.pk is None:
            return False
        return self.users.filter(pk=user.pk).exists()


class UserDetail(models.Model):
    """Per-user forum bookkeeping kept outside the host's user table."""

    STATE_PENDING = "pending_moderation"
    STATE_APPROVED = "approved"
    STATE_BLOCKED = "blocked"

    STATE_CHOICES = [
        (STATE_PENDING, "pending moderation"),
        (STATE_APPROVED, "approved"),
        (STATE_BLOCKED, "blocked"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="messageboards_detail",
    )
    last_seen_at = models.DateTimeField(null=True, blank=True, db_index=True)
    moderation_state = models.CharField(max_length=20, choices=STATE_CHOICES, default=STATE_PENDING)

    class Meta:
        ordering = ["-last_seen_at"]

    @classmethod
    def recently_active(cls, threshold_seconds: int):
        return cls.objects.filter(last_seen_at__gt=recently_active_cutoff(threshold_seconds))

    @classmethod
    def recently_active_users(cls, threshold_seconds: int) -> list:
        details = (
            cls.recently_active(threshold_seconds)
            .select_related("user")
            .order_by("-last_seen_at", "user_id")
        )
        return [detail.user for detail in details]


class MessageboardUser(models.Model):
    """When a user was last seen on a particular board."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="messageboard_activity",
    )
    messageboard = models.ForeignKey(Messageboard, on_delete=models.CASCADE, related_name="user_activity")
    last_seen_at = models.DateTimeField(db_index=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "messageboard"], name="messageboards_user_board"),
        ]


class UserPreference(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="messageboards_preference",
    )
    follow_topics_on_mention = models.BooleanField(default=True)
    notify_on_message = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)
