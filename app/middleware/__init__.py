# =============================================================================
# app/middleware/ - Request Middleware
# =============================================================================
# - navigation.py: Redirects unauthenticated page navigations to login
# =============================================================================

from app.middleware.navigation import NavigationGuardMiddleware

__all__ = ["NavigationGuardMiddleware"]
