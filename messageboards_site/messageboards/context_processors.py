from __future__ import annotations

from django.http import HttpRequest
from django.utils.functional import SimpleLazyObject

from messageboards.gate import Gate


def gate(request: HttpRequest) -> dict[str, object]:
    """Expose the gate's helpers to templates; nothing is queried until used."""
    current = getattr(request, "messageboards_gate", None)
    if current is None:
        current = Gate(request)
        request.messageboards_gate = current
    return {
        "active_users": SimpleLazyObject(current.active_users),
        "messageboards_current_user": SimpleLazyObject(current.resolve_actor),
        "messageboard": SimpleLazyObject(lambda: current.messageboard_or_none() or ""),
        "preferences": SimpleLazyObject(current.preferences),
        "signed_in": current.signed_in,
        "messageboards_layout": current.layout,
    }
