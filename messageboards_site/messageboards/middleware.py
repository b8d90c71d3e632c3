from __future__ import annotations

import logging

from messageboards.gate import Gate
from messageboards.responses import MAPPED_ERRORS, error_response

logger = logging.getLogger(__name__)

APP_NAME = "messageboards"


class MessageboardsGateMiddleware:
    """Give each request its own gate and render error pages for the app's views.

    Must come after ``AuthenticationMiddleware`` so the default identity
    resolver can read ``request.user``.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.messageboards_gate = Gate(request)
        return self.get_response(request)

    def process_exception(self, request, exception):
        match = getattr(request, "resolver_match", None)
        if match is None or APP_NAME not in match.app_names:
            return None
        if not isinstance(exception, MAPPED_ERRORS):
            return None
        gate = getattr(request, "messageboards_gate", None) or Gate(request)
        logger.info(
            "%s in %s: %s",
            type(exception).__name__,
            match.view_name,
            getattr(exception, "message", exception),
        )
        return error_response(request, exception, gate.layout)
