from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config import Settings
from deps import get_settings
from Login_module.Utils import Security

# auto_error=False so a missing header becomes our own 401 instead of FastAPI's 403
security_scheme = HTTPBearer(auto_error=False)


def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    settings: Settings = Depends(get_settings),
) -> dict:
    """
    Validates the bearer token on admin routes and returns its claims.
    Raises AuthorizationError (401) when the token is absent, invalid or expired.
    """
    token = credentials.credentials.strip() if credentials and credentials.credentials else None
    return Security.decode_admin_token(settings, token)
