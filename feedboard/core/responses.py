from typing import Any

FEEDS_UNAVAILABLE = "FEEDS_UNAVAILABLE"
NO_FEEDS_NOTICE = "No feeds configured"
FEEDS_UNAVAILABLE_MESSAGE = "Failed to load feeds"


def success_response(data: Any, meta: dict | None = None) -> dict:
    return {"data": data, "error": None, "meta": meta or {}}


def error_response(
    code: str,
    message: str,
    trace_id: str,
    status: int = 400,
    details: dict | None = None,
) -> tuple[dict, int]:
    error = {"code": code, "message": message, "trace_id": trace_id, "details": details or {}}
    return {"data": None, "error": error, "meta": {}}, status
