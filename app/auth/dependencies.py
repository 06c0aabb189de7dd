# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The access token is read from the Authorization header (Bearer) or, for
# browser requests, from the session cookie.
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret)
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Any, Optional
from uuid import UUID

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWKError

from app.config import settings
from app.auth.models import AuthUser
from app.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# Missing/malformed headers are handled below so the 401 body stays uniform
security_optional = HTTPBearer(auto_error=False)

TOKEN_AUDIENCE = "authenticated"

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """Get the JWKS URL from Supabase URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification

    Raises:
        UnauthorizedError: If no usable key exists for the token
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise UnauthorizedError(f"unreadable token header: {e}")

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        if not settings.SUPABASE_JWT_SECRET:
            logger.warning("HS256 token received but SUPABASE_JWT_SECRET is not set")
            raise UnauthorizedError("no JWT secret configured")
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"No signing key for alg={alg}, kid={kid}")
    raise UnauthorizedError(f"unknown signing key {kid}")


def verify_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Raises:
        UnauthorizedError: If the token is invalid, expired or has no usable sub
    """
    signing_key, algorithm = _get_signing_key(token)

    try:
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise UnauthorizedError("token expired")
    except (JWTError, JWKError) as e:
        logger.warning(f"JWT validation failed: {e}")
        raise UnauthorizedError(f"invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise UnauthorizedError("missing sub claim")

    try:
        user_uuid = UUID(user_id)
    except (TypeError, ValueError):
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise UnauthorizedError("malformed sub claim")

    return AuthUser(id=user_uuid, email=payload.get("email"))


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """Return the bearer token, else the session cookie, else None."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> AuthUser:
    """
    Resolve the caller's session, server-side.

    Returns:
        AuthUser: The authenticated user

    Raises:
        UnauthorizedError: 401 if there is no valid session
    """
    token = extract_token(request, credentials)
    if token is None:
        logger.warning(f"No session on {request.method} {request.url.path}")
        raise UnauthorizedError("no token")

    user = verify_access_token(token)
    logger.debug(f"Authenticated user: {user.id}")
    return user


def get_current_user_optional(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> Optional[AuthUser]:
    """
    Like get_current_user, but returns None instead of raising.
    """
    try:
        return get_current_user(request, credentials)
    except UnauthorizedError:
        return None


def has_cached_session(request: Request) -> bool:
    """
    Cheap, local check used by the navigation guard.

    Reads the token's claims without verifying the signature and without
    any network call: a token with a `sub` that has not expired counts as a
    session. API endpoints never rely on this; they call get_current_user.
    """
    token = extract_token(request)
    if token is None:
        auth_header = request.headers.get("Authorization", "")
        scheme, _, value = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not value:
            return False
        token = value.strip()

    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return False

    if not claims.get("sub"):
        return False

    exp = claims.get("exp")
    if exp is None:
        return True
    try:
        return float(exp) > time.time()
    except (TypeError, ValueError):
        return False
