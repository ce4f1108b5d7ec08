from passlib.context import CryptContext
from sentic.common.logging.logger import log_error

# Initialize password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12
)


def hash_password(password: str) -> str:
    """
    Hash a password for secure storage.

    Args:
        password (str): Plain text password to hash.

    Returns:
        str: Hashed password.

    Raises:
        ValueError: If password is empty or invalid.
    """
    if not password or not isinstance(password, str):
        log_error("Invalid password input", extra={"input_type": str(type(password))})
        raise ValueError("Password must be a non-empty string")

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password (str): Plain text password to verify.
        hashed_password (str): Hashed password from storage.

    Returns:
        bool: True if password matches, False otherwise (including malformed hashes).
    """
    if not plain_password or not hashed_password:
        return False

    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        log_error("Password verification failed", extra={"error": str(e)})
        return False
