# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Login, signup and logout against Supabase Auth.
#
# A successful login stores the Supabase access token in an httponly cookie,
# which is what both the navigation guard and the data endpoints read.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response

from app.auth.dependencies import get_current_user
from app.auth.models import AuthSessionResponse, AuthUser, Credentials, VerifyResponse
from app.config import settings
from app.dependencies import get_auth_client
from app.exceptions import AuthProviderError
from lib.supabase_client import error_message

logger = logging.getLogger(__name__)

router = APIRouter()

AuthClientDep = Annotated[Any, Depends(get_auth_client)]


def _set_session_cookie(response: Response, session: Any) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.access_token,
        max_age=getattr(session, "expires_in", None),
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def _session_response(result: Any) -> AuthSessionResponse:
    user = getattr(result, "user", None)
    return AuthSessionResponse(
        user_id=str(user.id) if user is not None else None,
        email=getattr(user, "email", None),
        session_active=getattr(result, "session", None) is not None,
    )


@router.post("/login", response_model=AuthSessionResponse)
def login(
    credentials: Credentials,
    response: Response,
    auth: AuthClientDep,
) -> AuthSessionResponse:
    """
    Sign in with email and password.

    Raises:
        401: If Supabase rejects the credentials
    """
    try:
        result = auth.sign_in_with_password(
            {"email": credentials.email, "password": credentials.password}
        )
    except Exception as e:
        logger.warning(f"Login failed for {credentials.email}: {e}")
        raise AuthProviderError(error_message(e, "Invalid login credentials"), status_code=401)

    if getattr(result, "session", None) is None:
        raise AuthProviderError("Invalid login credentials", status_code=401)

    _set_session_cookie(response, result.session)
    logger.info(f"User logged in: {result.user.id}")
    return _session_response(result)


@router.post("/signup", response_model=AuthSessionResponse)
def signup(
    credentials: Credentials,
    response: Response,
    auth: AuthClientDep,
) -> AuthSessionResponse:
    """
    Create an account.

    When the project requires email confirmation Supabase returns no session;
    the cookie is only set when one is returned.

    Raises:
        400: If Supabase rejects the signup
    """
    try:
        result = auth.sign_up(
            {"email": credentials.email, "password": credentials.password}
        )
    except Exception as e:
        logger.warning(f"Signup failed for {credentials.email}: {e}")
        raise AuthProviderError(error_message(e, "Signup failed"), status_code=400)

    if getattr(result, "session", None) is not None:
        _set_session_cookie(response, result.session)

    logger.info(f"User signed up: {credentials.email}")
    return _session_response(result)


@router.post("/logout")
async def logout(response: Response) -> dict:
    """Clear the session cookie."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return {"logged_out": True}


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> VerifyResponse:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return VerifyResponse(
        valid=True,
        user_id=str(user.id),
        email=user.email,
    )
