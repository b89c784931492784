from fastapi import Depends, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_403_FORBIDDEN

from inkwell.settings import Settings, settings

API_KEY_NAME = "X-Inkwell-Key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_api_key(
    api_key_header: str = Security(api_key_header),
    current_settings: Settings = Depends(get_settings),
):
    if current_settings.INKWELL_API_KEY and api_key_header == current_settings.INKWELL_API_KEY:
        return api_key_header
    raise HTTPException(
        status_code=HTTP_403_FORBIDDEN,
        detail="Could not validate API key",
    )


def get_admin_username(
    _api_key: str = Depends(get_api_key),
    current_settings: Settings = Depends(get_settings),
) -> str:
    """Principal recorded as the author of posts created through the admin API."""
    return current_settings.ADMIN_USERNAME
