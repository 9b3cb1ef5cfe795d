"""
Route gating for the journaling client.

Two authentication policies exist on purpose and each call site picks one:

* ``is_logged_in``: a cached user is present. In-app protected routes use it.
* ``has_fresh_session``: a cached user is present and the access token is
  unexpired. Only the root redirect uses it.

An expired-but-present session therefore still renders protected pages
(data fetches will heal or clear it through the refresh flow) while the root
path sends the same state to the login screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional, Protocol

from bujo.core.exceptions import RouteNotFoundError
from bujo.services.token_store import TokenStore
from bujo.services.token_validator import TokenValidator

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
LOGIN_PATH = "/login"
HOME_PATH = "/home"


@dataclass(slots=True, frozen=True)
class Route:
    path: str
    protected: bool = False


@dataclass(slots=True, frozen=True)
class RouteDecision:
    """Outcome of a navigation request."""

    action: Literal["render", "redirect"]
    path: str

    @property
    def target(self) -> str:
        return self.path

    @property
    def renders(self) -> bool:
        return self.action == "render"


DEFAULT_ROUTES = (
    Route(ROOT_PATH),
    Route(LOGIN_PATH),
    Route(HOME_PATH),
    Route("/diary", protected=True),
    Route("/bullet", protected=True),
    Route("/motivation", protected=True),
    Route("/profile", protected=True),
    Route("/goals", protected=True),
    Route("/plans", protected=True),
)


class Navigator(Protocol):
    def navigate(self, path: str) -> None:
        ...


class NavigationHistory:
    """Navigator that records visited paths; the default for headless use."""

    def __init__(self) -> None:
        self.history: List[str] = []

    @property
    def current(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def navigate(self, path: str) -> None:
        self.history.append(path)


def _normalize_path(path: str) -> str:
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


class RouteGuard:
    """Decide whether a navigation target renders or redirects to login."""

    def __init__(
        self,
        token_store: TokenStore,
        *,
        validator: Optional[TokenValidator] = None,
        routes: Iterable[Route] = DEFAULT_ROUTES,
        navigator: Optional[Navigator] = None,
    ) -> None:
        self._store = token_store
        self._validator = validator or TokenValidator()
        self._routes: Dict[str, Route] = {_normalize_path(r.path): r for r in routes}
        self._navigator = navigator

    @property
    def routes(self) -> List[Route]:
        return list(self._routes.values())

    def is_logged_in(self) -> bool:
        return self._store.read_user() is not None

    def has_fresh_session(self) -> bool:
        record = self._store.read()
        if record is None or not record.access:
            return False
        return self._validator.is_valid(record.access)

    def root_redirect(self) -> RouteDecision:
        if self.has_fresh_session():
            return RouteDecision("redirect", HOME_PATH)
        return RouteDecision("redirect", LOGIN_PATH)

    def decide(self, path: str) -> RouteDecision:
        normalized = _normalize_path(path)
        if normalized == ROOT_PATH:
            return self.root_redirect()

        route = self._routes.get(normalized)
        if route is None:
            raise RouteNotFoundError(f"No route declared for {normalized}")
        if route.protected and not self.is_logged_in():
            logger.info("No user found for %s; redirecting to %s", normalized, LOGIN_PATH)
            return RouteDecision("redirect", LOGIN_PATH)
        return RouteDecision("render", normalized)

    def navigate(self, path: str) -> RouteDecision:
        """Resolve ``path`` and hand the final location to the navigator."""
        decision = self.decide(path)
        if self._navigator is not None:
            self._navigator.navigate(decision.path)
        return decision


__all__ = [
    "DEFAULT_ROUTES",
    "HOME_PATH",
    "LOGIN_PATH",
    "NavigationHistory",
    "Navigator",
    "ROOT_PATH",
    "Route",
    "RouteDecision",
    "RouteGuard",
]
