# apps/api/cms/services/route_guard.py
"""
Admin console route guard.

A navigation to a console page resolves the session first (LOADING), then
either lets an authenticated admin through or sends everyone else to the
login page. The requested path is remembered outside the session and used
exactly once for the post-login redirect.
"""
from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Optional, Protocol

from cms.core.config import settings


class SessionState(str, enum.Enum):
    loading = "loading"
    authenticated_admin = "authenticated_admin"
    unauthenticated = "unauthenticated"


@dataclass(frozen=True)
class ConsoleSession:
    user_id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def resolve_state(session: Optional[ConsoleSession], resolved: bool = True) -> SessionState:
    if not resolved:
        return SessionState.loading
    if session is not None and session.is_admin:
        return SessionState.authenticated_admin
    # editor/viewer oturumları da konsol için "giriş yapılmamış" sayılır
    return SessionState.unauthenticated


class RedirectStore(Protocol):
    def get(self) -> Optional[str]: ...
    def set(self, path: str) -> None: ...
    def clear(self) -> None: ...


class GuardAction(str, enum.Enum):
    allow = "allow"
    redirect = "redirect"
    pending = "pending"


@dataclass(frozen=True)
class GuardDecision:
    action: GuardAction
    location: Optional[str] = None


def is_safe_path(path: Optional[str], login_path: Optional[str] = None) -> bool:
    """Local absolute paths only; the login page itself is never a redirect target."""
    login_path = login_path or settings.ADMIN_LOGIN_PATH
    if not path or not path.startswith("/") or path.startswith("//") or "\\" in path:
        return False
    return path.split("?", 1)[0].rstrip("/") != login_path.rstrip("/")


def evaluate(state: SessionState, requested_path: str, store: RedirectStore, login_path: Optional[str] = None) -> GuardDecision:
    login_path = login_path or settings.ADMIN_LOGIN_PATH
    if state == SessionState.loading:
        return GuardDecision(GuardAction.pending)
    if state == SessionState.authenticated_admin:
        return GuardDecision(GuardAction.allow)
    if is_safe_path(requested_path, login_path):
        store.set(requested_path)
    return GuardDecision(GuardAction.redirect, login_path)


def consume_redirect(store: RedirectStore, landing_path: Optional[str] = None, login_path: Optional[str] = None) -> str:
    """Remembered path (once, then cleared) or the landing page."""
    landing_path = landing_path or settings.ADMIN_LANDING_PATH
    path = store.get()
    store.clear()
    if is_safe_path(path, login_path):
        return path
    return landing_path
