# =============================================================================
# core/navigation.py - Navigation Guard Policy
# =============================================================================
# Decides whether a page navigation may proceed or must be sent to login.
#
# There is one policy type; the observed "login only" and "login + signup"
# variants are two configurations of it, selected by PolicyName.
#
# Usage:
#   policy = build_policy(PolicyName.LOGIN_AND_SIGNUP)
#   decision = policy.decide("/dashboard", lambda: has_session)
#   if decision.outcome is NavigationOutcome.REDIRECT:
#       ...redirect to decision.location
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from pydantic import BaseModel, ConfigDict, model_validator

SessionLookup = Callable[[], bool]


class PolicyName(str, Enum):
    """Named public-path sets the guard can run with."""
    LOGIN_ONLY = "login"
    LOGIN_AND_SIGNUP = "login_signup"


class NavigationOutcome(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class NavigationDecision:
    """Result of checking one navigation."""
    outcome: NavigationOutcome
    location: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is NavigationOutcome.ALLOW


ALLOW = NavigationDecision(NavigationOutcome.ALLOW)


class NavigationPolicy(BaseModel):
    """
    Allow-list policy for page navigations.

    Paths are matched exactly: "/login/" and "/login?next=x" are not "/login".
    The login path must itself be public, otherwise every visit to it would
    redirect back to it.
    """

    model_config = ConfigDict(frozen=True)

    name: PolicyName
    login_path: str = "/login"
    public_paths: frozenset[str]

    @model_validator(mode="after")
    def _login_path_is_public(self) -> "NavigationPolicy":
        if self.login_path not in self.public_paths:
            raise ValueError(
                f"login_path {self.login_path!r} must be one of the public paths"
            )
        return self

    def is_public(self, path: str) -> bool:
        return path in self.public_paths

    def decide(self, path: str, session_lookup: SessionLookup) -> NavigationDecision:
        """
        Decide the outcome of navigating to `path`.

        The session lookup is only consulted for non-public paths.
        """
        if self.is_public(path):
            return ALLOW
        if not session_lookup():
            return NavigationDecision(NavigationOutcome.REDIRECT, self.login_path)
        return ALLOW


def build_policy(
    name: PolicyName | str,
    login_path: str = "/login",
    signup_path: str = "/signup",
    extra_public_paths: Iterable[str] = (),
) -> NavigationPolicy:
    """
    Build a NavigationPolicy from configuration values.

    Args:
        name: Which variant to build ("login" or "login_signup")
        login_path: Redirect target, always public
        signup_path: Public only under LOGIN_AND_SIGNUP
        extra_public_paths: Additional exact-match public paths

    Returns:
        NavigationPolicy: The frozen policy
    """
    name = PolicyName(name)
    public_paths = {login_path, *extra_public_paths}
    if name is PolicyName.LOGIN_AND_SIGNUP:
        public_paths.add(signup_path)

    return NavigationPolicy(
        name=name,
        login_path=login_path,
        public_paths=frozenset(public_paths),
    )
