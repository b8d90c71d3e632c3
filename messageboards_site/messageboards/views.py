from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.db import IntegrityError
from django.http import HttpRequest, JsonResponse
from django.utils.text import slugify
from django.views.decorators.http import require_GET, require_POST

from .errors import ResourceKind, not_found_for
from .gate import Gate
from .models import Messageboard, PrivateTopic, Topic


def _gate(request: HttpRequest) -> Gate:
    gate = getattr(request, "messageboards_gate", None)
    if gate is None:
        gate = Gate(request)
        request.messageboards_gate = gate
    return gate


def _user_summary(user) -> dict[str, Any]:
    return {"id": user.pk, "username": user.get_username()}


def _board_summary(board: Messageboard) -> dict[str, Any]:
    return {
        "id": board.pk,
        "slug": board.slug,
        "name": board.name,
        "description": board.description,
        "locked": board.locked,
        "position": board.position,
    }


def _topic_summary(topic: Topic) -> dict[str, Any]:
    return {
        "id": topic.pk,
        "slug": topic.slug,
        "title": topic.title,
        "messageboard": topic.messageboard.slug,
        "user_id": topic.user_id,
        "locked": topic.locked,
        "moderation_state": topic.moderation_state,
        "last_post_at": topic.last_post_at.isoformat() if topic.last_post_at else None,
    }


def _unique_topic_slug(board: Messageboard, title: str) -> str:
    base = slugify(title)[:200] or "topic"
    slug = base
    suffix = 2
    while Topic.objects.filter(messageboard=board, slug=slug).exists():
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


@require_GET
def messageboard_list(request: HttpRequest) -> JsonResponse:
    gate = _gate(request)
    boards = Messageboard.objects.all()
    return JsonResponse(
        {
            "messageboards": [_board_summary(board) for board in boards],
            "active_users": [_user_summary(user) for user in gate.active_users()],
            "signed_in": gate.signed_in(),
        }
    )


@require_POST
def messageboard_create(request: HttpRequest) -> JsonResponse:
    gate = _gate(request)
    gate.require_login()
    name = (request.POST.get("name") or "").strip()
    board = Messageboard(
        name=name,
        slug=slugify(request.POST.get("slug") or name),
        description=request.POST.get("description", ""),
    )
    gate.authorize_creating(board)
    if not name or not board.slug:
        return JsonResponse({"error": "invalid", "message": "A name is required."}, status=400)
    try:
        board.save()
    except IntegrityError:
        return JsonResponse(
            {"error": "invalid", "message": "A messageboard with a similar name already exists."},
            status=400,
        )
    return JsonResponse({"messageboard": _board_summary(board)}, status=201)


@require_GET
def messageboard_detail(request: HttpRequest, messageboard_id: str) -> JsonResponse:
    gate = _gate(request)
    board = gate.messageboard()
    gate.authorize_reading(board)
    gate.update_user_activity()
    topics = board.topics.select_related("messageboard")
    if not gate.moderatable_messageboards().filter(pk=board.pk).exists():
        topics = topics.exclude(moderation_state=Topic.STATE_BLOCKED)
    return JsonResponse(
        {
            "messageboard": _board_summary(board),
            "topics": [_topic_summary(topic) for topic in topics],
            "active_users": [_user_summary(user) for user in gate.active_users()],
        }
    )


@require_POST
def topic_create(request: HttpRequest, messageboard_id: str) -> JsonResponse:
    gate = _gate(request)
    gate.require_login()
    board = gate.messageboard()
    title = (request.POST.get("title") or "").strip()
    topic = Topic(messageboard=board, user=gate.current_user, title=title)
    gate.authorize_creating(topic)
    if not title:
        return JsonResponse({"error": "invalid", "message": "A title is required."}, status=400)
    topic.slug = _unique_topic_slug(board, title)
    topic.save()
    content = (request.POST.get("content") or "").strip()
    if content:
        topic.posts.create(messageboard=board, user=gate.current_user, content=content)
    gate.update_user_activity()
    return JsonResponse({"topic": _topic_summary(topic)}, status=201)


@require_GET
def topic_detail(request: HttpRequest, messageboard_id: str, topic_slug: str) -> JsonResponse:
    gate = _gate(request)
    board = gate.messageboard()
    topic = board.topics.filter(slug=topic_slug).select_related("messageboard").first()
    if topic is None:
        raise not_found_for(Topic.resource_kind)(topic_slug)
    gate.authorize_reading(topic)
    gate.update_user_activity()
    posts = [
        {"id": post.pk, "user_id": post.user_id, "content": post.content, "created_at": post.created_at.isoformat()}
        for post in topic.posts.all()
    ]
    return JsonResponse({"topic": _topic_summary(topic), "posts": posts})


@require_POST
def private_topic_create(request: HttpRequest) -> JsonResponse:
    gate = _gate(request)
    gate.require_login()
    private_topic = PrivateTopic(user=gate.current_user, title=(request.POST.get("title") or "").strip())
    gate.authorize_creating(private_topic)
    recipient_ids = [raw for raw in request.POST.getlist("user_ids") if str(raw).isdigit()]
    recipients = list(get_user_model().objects.filter(pk__in=recipient_ids))
    if not private_topic.title or not recipients:
        return JsonResponse(
            {"error": "invalid", "message": "A title and at least one recipient are required."},
            status=400,
        )
    private_topic.save()
    private_topic.users.add(gate.current_user, *recipients)
    return JsonResponse(
        {"private_topic": {"id": private_topic.pk, "title": private_topic.title}},
        status=201,
    )


@require_GET
def private_topic_detail(request: HttpRequest, pk: int) -> JsonResponse:
    gate = _gate(request)
    gate.require_login()
    private_topic = PrivateTopic.objects.filter(pk=pk).first()
    if private_topic is None:
        raise not_found_for(PrivateTopic.resource_kind)(pk)
    gate.authorize_reading(private_topic)
    return JsonResponse(
        {
            "private_topic": {
                "id": private_topic.pk,
                "title": private_topic.title,
                "users": [_user_summary(user) for user in private_topic.users.order_by("pk")],
            }
        }
    )


@require_GET
def user_detail(request: HttpRequest, username: str) -> JsonResponse:
    gate = _gate(request)
    user_model = get_user_model()
    user = user_model.objects.filter(**{user_model.USERNAME_FIELD: username}).first()
    if user is None:
        raise not_found_for(ResourceKind.USER)(username)
    gate.authorize_reading(user)
    detail = getattr(user, "messageboards_detail", None)
    return JsonResponse(
        {
            "user": _user_summary(user),
            "last_seen_at": detail.last_seen_at.isoformat() if detail and detail.last_seen_at else None,
        }
    )


@require_GET
def preferences(request: HttpRequest) -> JsonResponse:
    gate = _gate(request)
    gate.require_login()
    prefs = gate.preferences()
    return JsonResponse(
        {
            "follow_topics_on_mention": prefs.follow_topics_on_mention,
            "notify_on_message": prefs.notify_on_message,
        }
    )


@require_GET
def moderation_pending(request: HttpRequest) -> JsonResponse:
    gate = _gate(request)
    gate.require_login()
    boards = gate.moderatable_messageboards()
    if not boards.exists():
        raise PermissionDenied("not a moderator")
    pending = Topic.objects.filter(
        messageboard__in=boards,
        moderation_state=Topic.STATE_PENDING,
    ).select_related("messageboard")
    return JsonResponse(
        {
            "messageboards": [board.slug for board in boards],
            "pending_topics": [_topic_summary(topic) for topic in pending],
        }
    )
