"""
Authentication Utility - Password hashing and the authorization gate.

Provides:
- Password hashing with bcrypt
- `check_access`: role check evaluated once per request
- FastAPI dependencies for protected routes

The session only carries a capability (account id + role). Handlers that need
profile fields re-read the account from the database.
"""

from enum import Enum
from typing import Optional
from passlib.context import CryptContext
from fastapi import Depends, Request

from jobportal.core.config import get_settings
from jobportal.core.errors import Forbidden, Unauthorized
from jobportal.core.logging_config import get_logger
from jobportal.schemas.schemas import Role
from jobportal.services.session_service import SessionStore

settings = get_settings()
logger = get_logger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds
)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


class AccessDecision(str, Enum):
    allow = "allow"
    unauthorized = "unauthorized"
    forbidden = "forbidden"


def check_access(identity: Optional[dict], required_role: Optional[Role] = None) -> AccessDecision:
    """
    Decide whether a caller may run an operation.

    Only role equality is consulted; `required_role=None` means any
    authenticated caller.
    """
    if identity is None:
        return AccessDecision.unauthorized
    if required_role is not None and identity["role"] != required_role:
        return AccessDecision.forbidden
    return AccessDecision.allow


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


async def get_session_identity(request: Request) -> Optional[dict]:
    """Resolve the session cookie to {"account_id", "role"}, or None."""
    token = get_session_token(request)
    if not token:
        return None
    return SessionStore().resolve(token)


def _enforce(identity: Optional[dict], required_role: Optional[Role]) -> dict:
    decision = check_access(identity, required_role)
    if decision is AccessDecision.unauthorized:
        raise Unauthorized()
    if decision is AccessDecision.forbidden:
        logger.info(
            "Denied %s account %s (requires %s)",
            identity["role"].value, identity["account_id"], required_role.value
        )
        raise Forbidden()
    return identity


async def get_current_account(identity: Optional[dict] = Depends(get_session_identity)) -> dict:
    """
    FastAPI dependency - Require any authenticated account.

    Usage:
        @router.get("/protected")
        async def route(account: dict = Depends(get_current_account)):
            return account
    """
    return _enforce(identity, None)


async def get_current_seeker(identity: Optional[dict] = Depends(get_session_identity)) -> dict:
    """Dependency - Require seeker role."""
    return _enforce(identity, Role.seeker)


async def get_current_employer(identity: Optional[dict] = Depends(get_session_identity)) -> dict:
    """Dependency - Require employer role."""
    return _enforce(identity, Role.employer)
