# =============================================================================
# app/middleware/navigation.py - Navigation Guard Middleware
# =============================================================================
# Sends page navigations without a session to the login page before the
# page handler runs.
#
# Only GET/HEAD requests outside the exempt prefixes (API, docs) are
# checked. API endpoints do their own server-side session verification and
# answer 401 instead of redirecting.
# =============================================================================

import logging
from typing import Iterable

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.auth.dependencies import has_cached_session
from core.navigation import NavigationOutcome, NavigationPolicy

logger = logging.getLogger(__name__)

NAVIGATION_METHODS = frozenset({"GET", "HEAD"})
DEFAULT_EXEMPT_PREFIXES = ("/api", "/docs", "/redoc", "/openapi.json")


class NavigationGuardMiddleware(BaseHTTPMiddleware):
    """Apply a NavigationPolicy to every page navigation."""

    def __init__(
        self,
        app: ASGIApp,
        policy: NavigationPolicy,
        exempt_prefixes: Iterable[str] = DEFAULT_EXEMPT_PREFIXES,
    ):
        super().__init__(app)
        self.policy = policy
        self.exempt_prefixes = tuple(exempt_prefixes)

    def is_navigation(self, request: Request) -> bool:
        if request.method not in NAVIGATION_METHODS:
            return False
        return not self.is_exempt(request.url.path)

    def is_exempt(self, path: str) -> bool:
        """Prefixes match whole path segments: "/api" covers "/api/x", not "/apiary"."""
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.exempt_prefixes
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.is_navigation(request):
            return await call_next(request)

        decision = self.policy.decide(
            request.url.path,
            lambda: has_cached_session(request),
        )

        if decision.outcome is NavigationOutcome.REDIRECT:
            logger.debug(f"Redirecting {request.url.path} -> {decision.location}")
            return RedirectResponse(decision.location, status_code=status.HTTP_302_FOUND)

        return await call_next(request)
