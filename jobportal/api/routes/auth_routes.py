"""
Authentication Routes

POST /auth/register - Register new account (seeker or employer)
POST /auth/login - Login and receive a session cookie
POST /auth/logout - Revoke the current session
GET /auth/status - Whether the caller is logged in, with minimal profile
"""

from typing import Optional
from fastapi import APIRouter, Depends, Request, Response

from jobportal.core.auth import get_session_identity, get_session_token
from jobportal.core.config import get_settings
from jobportal.core.logging_config import get_logger
from jobportal.services.mongo_service import AccountService
from jobportal.services.session_service import SessionStore
from jobportal.schemas.schemas import (
    AuthStatusResponse, LoginRequest, MessageResponse, RegisterRequest, Role, SessionUser
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
settings = get_settings()
logger = get_logger(__name__)


def session_user(doc: dict) -> SessionUser:
    return SessionUser(
        id=str(doc["_id"]),
        name=doc["name"],
        email=doc["email"],
        role=doc["role"],
        avatar_url=doc.get("avatar_url")
    )


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new account.

    A duplicate email is reported by the unique index on insert.
    """
    AccountService().register(request)
    return MessageResponse(
        message="Your account has been created successfully. You can now sign in."
    )


@router.post("/login", response_model=AuthStatusResponse)
async def login(request: LoginRequest, http_request: Request, response: Response):
    """
    Login and receive a session cookie.

    Unknown email and wrong password give the same 401 response.
    """
    account = AccountService().authenticate(request.email, request.password)

    sessions = SessionStore()
    previous = get_session_token(http_request)
    if previous:
        sessions.revoke(previous)
    token = sessions.create(str(account["_id"]), Role(account["role"]))

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure
    )
    logger.info("Account %s logged in", account["_id"])
    return AuthStatusResponse(authenticated=True, user=session_user(account))


@router.post("/logout", response_model=MessageResponse)
async def logout(http_request: Request, response: Response):
    """Revoke the session. Safe to call when not logged in."""
    token = get_session_token(http_request)
    if token:
        SessionStore().revoke(token)
    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="You have been successfully logged out.")


@router.get("/status", response_model=AuthStatusResponse)
async def auth_status(identity: Optional[dict] = Depends(get_session_identity)):
    """Current login state; profile fields are read fresh from the database."""
    if identity is None:
        return AuthStatusResponse(authenticated=False)

    account = AccountService().get_by_id(identity["account_id"])
    if account is None:
        return AuthStatusResponse(authenticated=False)

    return AuthStatusResponse(authenticated=True, user=session_user(account))
