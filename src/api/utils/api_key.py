"""
API Key Authentication

Guards the engine endpoints for the local overlay/UI process.
"""

from fastapi import Header, status

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError


async def verify_api_key(x_api_key: str = Header(None)):
    """
    Verify the API key from the X-API-Key header.

    Skipped entirely when AUTH_DISABLED is set.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    if ApplicationConfig.AUTH_DISABLED:
        return True

    if not x_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if x_api_key != ApplicationConfig.API_KEY:
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
