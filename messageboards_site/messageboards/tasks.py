from __future__ import annotations

from typing import Any

from celery import shared_task
from celery.utils.log import get_task_logger
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from messageboards.models import Messageboard, MessageboardUser, UserDetail

logger = get_task_logger(__name__)


@shared_task(name="messageboards.tasks.update_user_activity", ignore_result=True)
def update_user_activity(user_id: int, messageboard_id: int) -> dict[str, Any]:
    """Stamp the user's last-seen time globally and on the given board."""
    user = get_user_model().objects.filter(pk=user_id).first()
    board = Messageboard.objects.filter(pk=messageboard_id).first()
    if user is None or board is None:
        logger.debug(
            "Activity update skipped: user=%s board=%s no longer exist", user_id, messageboard_id
        )
        return {"status": "skipped"}

    now = timezone.now()
    with transaction.atomic():
        UserDetail.objects.update_or_create(user=user, defaults={"last_seen_at": now})
        MessageboardUser.objects.update_or_create(
            user=user,
            messageboard=board,
            defaults={"last_seen_at": now},
        )
    return {"status": "ok", "last_seen_at": now.isoformat()}
