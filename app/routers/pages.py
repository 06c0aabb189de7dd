# =============================================================================
# app/routers/pages.py - Page Routes
# =============================================================================
# Placeholder pages behind the navigation guard. "/" requires a session;
# the login and signup pages are public under the default policy.
# =============================================================================

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app.auth import AuthUser, get_current_user_optional
from app.config import settings

router = APIRouter(default_response_class=HTMLResponse)


def _page(title: str, body: str) -> str:
    return (
        "<!doctype html><html><head>"
        f"<title>{escape(title)}</title>"
        f"</head><body><h1>{escape(title)}</h1>{body}</body></html>"
    )


@router.get("/")
async def index(user: AuthUser | None = Depends(get_current_user_optional)) -> str:
    who = escape(user.email or str(user.id)) if user else "unknown user"
    return _page("Entries", f"<p>Signed in as {who}.</p>")


@router.get(settings.LOGIN_PATH)
async def login_page() -> str:
    return _page("Log in", "<p>POST /api/auth/login with email and password.</p>")


@router.get(settings.SIGNUP_PATH)
async def signup_page() -> str:
    return _page("Sign up", "<p>POST /api/auth/signup with email and password.</p>")
