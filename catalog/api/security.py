import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security.api_key import APIKeyHeader

logger = logging.getLogger(__name__)

TOKEN_HEADER_NAME = "TOKEN"
_token_header = APIKeyHeader(name=TOKEN_HEADER_NAME, auto_error=False)


def require_token(request: Request, token: str = Depends(_token_header)) -> None:
    """
    Reject requests whose TOKEN header does not match the configured secret.

    With no TOKEN configured every request is rejected, unless
    REQUIRE_TOKEN is switched off.
    """
    settings = request.app.state.settings
    if not settings.REQUIRE_TOKEN:
        return
    if not settings.TOKEN:
        logger.warning("Auth fail: TOKEN is not configured, rejecting request")
    if not token:
        logger.warning(f"Auth fail: missing {TOKEN_HEADER_NAME} header on {request.url.path}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="token not found")
    if token != settings.TOKEN:
        logger.warning(f"Auth fail: invalid token on {request.url.path}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid token")
