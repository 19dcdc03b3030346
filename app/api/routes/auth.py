"""Session login/logout and the auth dependencies (get_optional_user, require_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.core.config import Settings
from app.core.dependencies import CredentialStoreDep, SessionStoreDep, SettingsDep
from app.core.exceptions import AuthenticationError, ValidationError
from app.models.user import ROLE_ADMIN
from app.schemas.auth import (
    AuthCheckResponse,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from app.services.access_control import check_access, enforce

logger = logging.getLogger(__name__)
router = APIRouter()

ADMIN_DASHBOARD_URL = "/admin/dashboard"
USER_DASHBOARD_URL = "/user/dashboard"


def _session_token(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def get_optional_user(
    request: Request,
    sessions: SessionStoreDep,
    settings: SettingsDep,
) -> CurrentUser | None:
    """Dependency: the identity behind the session cookie, or None."""
    return sessions.get(_session_token(request, settings))


OptionalUserDep = Annotated[CurrentUser | None, Depends(get_optional_user)]


def require_user(identity: OptionalUserDep) -> CurrentUser:
    """Dependency: any authenticated identity. Raises 401 without a live session."""
    enforce(check_access(identity))
    return identity


def require_admin(identity: OptionalUserDep) -> CurrentUser:
    """Dependency: authenticated identity with role 'admin'. Raises 401 otherwise."""
    enforce(check_access(identity, admin_only=True))
    return identity


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    credentials: CredentialStoreDep,
    sessions: SessionStoreDep,
    settings: SettingsDep,
) -> LoginResponse:
    """
    Authenticate with username and password and start a server-side session.
    The session token is returned as an HTTP-only cookie.
    """
    username = body.username.strip()
    if not username or not body.password:
        raise ValidationError("Username and password are required")

    account = credentials.verify_credentials(username, body.password)
    if account is None:
        logger.warning("Failed login attempt for username=%s", username)
        raise AuthenticationError("Invalid credentials")

    # A fresh token on every login; whatever session the client held is dropped.
    sessions.destroy(_session_token(request, settings))
    token = sessions.create(account)
    _set_session_cookie(response, token, settings)
    logger.info("Login: user_id=%s role=%s", account.id, account.role)

    redirect_url = ADMIN_DASHBOARD_URL if account.role == ROLE_ADMIN else USER_DASHBOARD_URL
    return LoginResponse(role=account.role, redirect_url=redirect_url)


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    sessions: SessionStoreDep,
    settings: SettingsDep,
) -> MessageResponse:
    """End the current session (if any) and clear the cookie."""
    sessions.destroy(_session_token(request, settings))
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Logged out successfully")


@router.get("/check", response_model=AuthCheckResponse, response_model_exclude_none=True)
def check_auth(identity: OptionalUserDep) -> AuthCheckResponse:
    """Report whether the caller has a live session, and as whom."""
    if identity is None:
        return AuthCheckResponse(authenticated=False)
    return AuthCheckResponse(
        authenticated=True,
        role=identity.role,
        username=identity.username,
    )
