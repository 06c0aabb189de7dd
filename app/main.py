# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Entryboard API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main          (host/port from API_HOST / API_PORT)
#   entryboard                  (console script, same as above)
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    EntryboardException,
    entryboard_exception_handler,
    error_body,
    http_exception_handler,
    validation_exception_handler,
)
from app.middleware import NavigationGuardMiddleware
from app.routers import entries, health, pages
from app.auth import routes as auth_routes
from core.navigation import build_policy

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


navigation_policy = build_policy(
    settings.NAVIGATION_POLICY,
    login_path=settings.LOGIN_PATH,
    signup_path=settings.SIGNUP_PATH,
    extra_public_paths=settings.extra_public_paths_list,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup.
    """
    logger.info(f"Starting Entryboard API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(
        f"Navigation policy '{navigation_policy.name.value}', "
        f"public paths: {sorted(navigation_policy.public_paths)}"
    )

    yield

    logger.info("Shutting down Entryboard API")


# Create FastAPI application
app = FastAPI(
    title="Entryboard API",
    description="""
## Guestbook-style entries backed by Supabase

Every page except the public ones (login, signup) redirects to the login page
when there is no session. The data endpoints check the session themselves.

### Endpoints

| Endpoint | Body | Returns |
|----------|------|---------|
| `POST /api/fetchData` | `{"table": "entries"}` | rows, newest first |
| `POST /api/postData` | `{"name", "email", "message"}` | inserted row |

Errors are returned as `{"statusCode": 401, "statusMessage": "..."}`.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Login, signup, logout and token verification",
        },
        {
            "name": "Entries",
            "description": "Read and write rows of the entries table",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
        {
            "name": "Pages",
            "description": "Guarded page routes",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Added before CORS so CORS wraps it and preflight requests never get redirected
app.add_middleware(
    NavigationGuardMiddleware,
    policy=navigation_policy,
    exempt_prefixes=settings.guard_exempt_prefixes_list,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(EntryboardException, entryboard_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_body(500, "An unexpected error occurred"),
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

app.include_router(
    entries.router,
    prefix="/api",
    tags=["Entries"]
)

app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

app.include_router(
    pages.router,
    tags=["Pages"]
)


# =============================================================================
# Launcher
# =============================================================================

def run() -> None:
    """Serve the app with uvicorn on API_HOST:API_PORT."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG and settings.is_development,
    )


if __name__ == "__main__":
    run()
