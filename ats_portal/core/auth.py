"""
Authentication Utility - password hashing and role resolution.

Provides:
- Password hashing with bcrypt (salted, one-way)
- Role resolution for the login response

No session token is issued: the login response itself is the session
artifact the client keeps.
"""

from passlib.context import CryptContext

from ats_portal.core.config import get_settings

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash. Malformed hashes never verify."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def resolve_role(email: str, stored_role: str = None) -> str:
    """
    Role reported at login.

    The sentinel admin address is always "admin"; everyone else gets
    their stored role, or "student" when none is stored.
    """
    if email == get_settings().admin_email:
        return "admin"
    return stored_role or "student"
