from fastapi import Header, HTTPException

from feedboard.core.config import get_settings

AUTH_HEADER = "X-API-Key"


def require_api_key(api_key: str | None = Header(default=None, alias=AUTH_HEADER)) -> None:
    """Guard for mutating endpoints; a no-op unless API_AUTH_ENABLED is set."""
    settings = get_settings()
    if not settings.api_auth_enabled:
        return
    if not api_key or api_key != settings.api_auth_token:
        raise HTTPException(status_code=401, detail="Unauthorized")
