"""Response error extraction for load test observability.

Every marketplace error uses the response envelope
``{"success": false, "message": "...", "data": {"errors": ...}}``; request
validation failures list ``{"field", "message"}`` pairs under ``data.errors``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    message = body.get("message") or ""
    errors = (body.get("data") or {}).get("errors")

    if isinstance(errors, list):
        parts = [f"{err.get('field')}: {err.get('message')}" for err in errors]
        return " | ".join(parts) or message
    if isinstance(errors, dict):
        parts = [f"{field}: {msgs[0] if isinstance(msgs, list) and msgs else msgs}" for field, msgs in errors.items()]
        return " | ".join(parts) or message

    return message or str(body)[:300]


def payload(response: Response) -> dict:
    """The ``data`` member of a successful response."""
    return response.json().get("data") or {}
