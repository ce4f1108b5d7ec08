# File: common/dependencies/auth_dep.py
from typing import Optional

from fastapi import Depends, Header

from sentic.common.config.settings import Settings
from sentic.common.dependencies.service_dep import get_app_settings
from sentic.common.security.jwt_handler import decode_admin_token, get_token_from_header


async def require_admin(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Resolve the bearer token to an admin id, or fail with 401."""
    token = get_token_from_header(authorization)
    payload = decode_admin_token(settings, token)
    return payload["sub"]
