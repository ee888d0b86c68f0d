"""
Admin login - exchanges the shared admin password for a signed bearer token.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from config import Settings
from deps import get_settings
from errors import AuthorizationError
from Login_module.Utils import Security

from .Admin_schema import AdminLoginRequest, AdminTokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/login", response_model=AdminTokenResponse)
def admin_login(
    data: Optional[AdminLoginRequest] = Body(None),
    settings: Settings = Depends(get_settings),
):
    """Check the admin password and issue a token. Any mismatch returns 401."""
    password = data.password if data else None
    if not Security.check_admin_password(settings, password):
        logger.warning("Admin login rejected")
        raise AuthorizationError("Invalid password")

    if not settings.ADMIN_TOKEN_SECRET:
        logger.error("Admin login attempted but ADMIN_TOKEN_SECRET is not set")
        raise AuthorizationError("Invalid password")

    token = Security.create_admin_token(settings)
    logger.info("Admin token issued")
    return AdminTokenResponse(token=token)
