# infrastructure/setup/initial_setup.py
from typing import Optional

from sentic.common.logging.logger import log_info
from sentic.common.security.password import hash_password
from sentic.infrastructure.database.mongodb.repositories.admin_repository import AdminRepository

MIN_PASSWORD_LENGTH = 8


async def ensure_admin(admins: AdminRepository, username: str, password: str) -> Optional[str]:
    """Create the admin account unless one with that username exists. Returns the new id."""
    if not username:
        raise ValueError("Admin username must not be empty")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Admin password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if await admins.find_by_username(username):
        log_info("Admin already exists", extra={"username": username})
        return None

    admin_id = await admins.create(username, hash_password(password))
    log_info("Admin user created", extra={"admin_id": admin_id, "username": username})
    return admin_id
