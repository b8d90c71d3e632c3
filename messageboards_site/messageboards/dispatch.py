from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class CeleryDispatcher:
    """Queue Celery tasks without waiting for their result."""

    def schedule(self, task, *args, **kwargs) -> None:
        logger.debug("Scheduling %s args=%s", getattr(task, "name", task), args)
        task.delay(*args, **kwargs)


class RecordingDispatcher:
    """Keep scheduled jobs in memory instead of queueing them."""

    def __init__(self) -> None:
        self.scheduled: list[tuple[object, tuple, dict]] = []

    def schedule(self, task, *args, **kwargs) -> None:
        self.scheduled.append((task, args, kwargs))
