from datetime import datetime, timedelta
from typing import Dict, Any, Optional
import hmac
import logging

import jwt

from config import Settings
from errors import AuthorizationError
from Login_module.Utils.datetime_utils import now_kst

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"


def check_admin_password(settings: Settings, password: Optional[str]) -> bool:
    """
    Exact match against the configured admin password.
    Always False when no password is configured or none was supplied.
    """
    if not password or not settings.ADMIN_PASSWORD:
        return False
    return hmac.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))


def create_admin_token(settings: Settings, now: Optional[datetime] = None) -> str:
    """
    Creates a JWT admin token carrying the admin role and an expiry
    ADMIN_TOKEN_TTL_HOURS after issuance.
    """
    if not settings.ADMIN_TOKEN_SECRET:
        raise AuthorizationError("Admin token secret is not configured")
    issued_at = now or now_kst()
    to_encode: Dict[str, Any] = {
        "role": ADMIN_ROLE,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.ADMIN_TOKEN_TTL_HOURS),
    }
    return jwt.encode(to_encode, settings.ADMIN_TOKEN_SECRET, algorithm=ALGORITHM)


def decode_admin_token(settings: Settings, token: Optional[str]) -> Dict[str, Any]:
    """
    Decodes and validates an admin token.
    Raises AuthorizationError for missing, invalid, expired or non-admin tokens.
    """
    if not token or not settings.ADMIN_TOKEN_SECRET:
        raise AuthorizationError()
    try:
        decoded = jwt.decode(token, settings.ADMIN_TOKEN_SECRET, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired admin token")
        raise AuthorizationError()
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected invalid admin token: {e}")
        raise AuthorizationError()
    if decoded.get("role") != ADMIN_ROLE:
        raise AuthorizationError()
    return decoded
