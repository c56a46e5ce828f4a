import logging

from fastapi import Depends, Header, Request

from app.core.config import Settings, get_settings
from app.core.errors import APIError, ERR_UNAUTHORISED

logger = logging.getLogger(__name__)


async def require_authorisation(
    request: Request,
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    if not authorization or authorization != settings.AUTH_TOKEN:
        logger.info("caller unauthorised to perform requested action: %s %s", request.method, request.url.path)
        raise APIError(ERR_UNAUTHORISED, status_code=401)

    logger.info("caller authorised to perform requested action: %s %s", request.method, request.url.path)
