from __future__ import annotations

from django.core.exceptions import PermissionDenied
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.utils.translation import gettext

from messageboards.errors import ForbiddenError, NotFoundError

NOT_FOUND_TEMPLATE = "messageboards/error_pages/not_found.html"
FORBIDDEN_TEMPLATE = "messageboards/error_pages/forbidden.html"

MAPPED_ERRORS = (NotFoundError, ForbiddenError, PermissionDenied)


def _wants_json(request: HttpRequest) -> bool:
    accept = request.META.get("HTTP_ACCEPT", "")
    return "application/json" in accept and "text/html" not in accept


def error_response(request: HttpRequest, exc: Exception, layout: str) -> HttpResponse | None:
    """Render the standard page for a mapped error, or ``None`` if unmapped."""
    if isinstance(exc, NotFoundError):
        status, template, code = 404, NOT_FOUND_TEMPLATE, exc.code
        message = exc.message
    elif isinstance(exc, ForbiddenError):
        status, template, code = 403, FORBIDDEN_TEMPLATE, exc.code
        message = exc.message
    elif isinstance(exc, PermissionDenied):
        status, template, code = 403, FORBIDDEN_TEMPLATE, "not_authorized"
        message = gettext("You are not authorized to access this page.")
    else:
        return None

    if _wants_json(request):
        return JsonResponse({"error": code, "message": message}, status=status)
    context = {
        "error": exc,
        "message": message,
        "messageboards_layout": layout,
    }
    return render(request, template, context, status=status)
