from typing import Optional

from sentic.common.config.settings import Settings
from sentic.common.exceptions.base_exception import UnauthorizedError, ValidationError
from sentic.common.logging.logger import log_info, log_warning
from sentic.common.schemas.standard_response import AdminSummary, LoginResult
from sentic.common.security.jwt_handler import create_admin_token
from sentic.common.security.password import verify_password
from sentic.infrastructure.database.mongodb.repositories.admin_repository import AdminRepository


async def login_admin_service(
    settings: Settings,
    admins: AdminRepository,
    username: Optional[str],
    password: Optional[str],
    client_ip: str = "unknown",
) -> LoginResult:
    if not username or not password:
        raise ValidationError("Username and password are required")

    admin = await admins.find_by_username(username)
    if not admin or "password" not in admin:
        log_warning("Admin not found", extra={"username": username, "ip": client_ip})
        raise UnauthorizedError("Invalid credentials")

    if not verify_password(password, admin["password"]):
        log_warning("Password verification failed", extra={"username": username, "ip": client_ip})
        raise UnauthorizedError("Invalid credentials")

    admin_id = str(admin["_id"])
    token = create_admin_token(settings, admin_id)

    log_info("Admin login successful", extra={"admin_id": admin_id, "username": username, "ip": client_ip})
    return LoginResult(token=token, admin=AdminSummary(id=admin_id, username=admin["username"]))
