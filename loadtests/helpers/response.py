"""Response error extraction for load test observability.

Parses marketplace API error responses into human-readable messages. Errors
arrive as ``{"success": false, "message": "...", "error": {"field": [...]}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    error = body.get("error")
    if isinstance(error, dict):
        fields = " | ".join(f"{k}: {', '.join(map(str, v)) if isinstance(v, list) else v}" for k, v in error.items())
        return f"{body.get('message', '')} ({fields})" if fields else body.get("message", "")

    if "message" in body:
        return str(body["message"])

    # Unknown shape, stringify and truncate
    return str(body)[:300]
