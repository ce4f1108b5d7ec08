"""
JWT Handler Module

Issues and verifies the signed bearer tokens used by the admin panel.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, ExpiredSignatureError, JWTError as JoseJWTError

from sentic.common.config.settings import Settings
from sentic.common.exceptions.base_exception import UnauthorizedError
from sentic.common.logging.logger import log_info, log_warning

ISSUER = "sentic-admin"


def create_admin_token(
    settings: Settings,
    admin_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a time-bounded token whose subject is the admin id."""
    if not settings.ADMIN_JWT_SECRET:
        raise RuntimeError("ADMIN_JWT_SECRET is not configured")

    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else timedelta(days=settings.ADMIN_JWT_EXPIRE_DAYS))
    payload = {
        "sub": str(admin_id),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "iss": ISSUER,
    }

    token = jwt.encode(payload, settings.ADMIN_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    log_info("Admin token issued", extra={"admin_id": str(admin_id), "exp": payload["exp"]})
    return token


def decode_admin_token(settings: Settings, token: str) -> dict:
    """
    Verify signature, expiry and issuer of an admin token.

    Raises:
        UnauthorizedError: If the token is expired, tampered with or lacks a subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.ADMIN_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=ISSUER,
        )
    except ExpiredSignatureError:
        log_warning("Admin token expired")
        raise UnauthorizedError("Invalid or expired token")
    except JoseJWTError as e:
        log_warning("Invalid admin token", extra={"error": str(e)})
        raise UnauthorizedError("Invalid or expired token")

    if not payload.get("sub"):
        log_warning("Admin token missing subject")
        raise UnauthorizedError("Invalid or expired token")
    return payload


def get_token_from_header(authorization: Optional[str]) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Unauthorized")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError("Unauthorized")
    return token
