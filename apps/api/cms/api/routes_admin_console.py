# apps/api/cms/api/routes_admin_console.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from cms.core.config import settings
from cms.core.security import create_access_token
from cms.deps import get_db, get_console_session
from cms.api.routes_auth import login_or_401
from cms.schemas.auth import LoginIn, ConsoleLoginOut
from cms.services import route_guard
from cms.services.route_guard import ConsoleSession, GuardAction

router = APIRouter(prefix="/admin", tags=["admin_console"])

class CookieRedirectStore:
    """Remembered console path, kept in its own cookie (outside the session)."""

    def __init__(self, request: Request, response: Response):
        self.request = request
        self.response = response

    def get(self) -> Optional[str]:
        return self.request.cookies.get(settings.REDIRECT_COOKIE_NAME)

    def set(self, path: str) -> None:
        self.response.set_cookie(settings.REDIRECT_COOKIE_NAME, path, httponly=True, samesite="lax", path="/")

    def clear(self) -> None:
        self.response.delete_cookie(settings.REDIRECT_COOKIE_NAME, path="/")

def _requested_path(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path

def _guarded(request: Request, session: Optional[ConsoleSession], page: str):
    redirect = RedirectResponse(settings.ADMIN_LOGIN_PATH, status_code=307)
    decision = route_guard.evaluate(
        route_guard.resolve_state(session), _requested_path(request), CookieRedirectStore(request, redirect),
    )
    if decision.action != GuardAction.allow:
        return redirect
    return {"page": page, "user": {"id": session.user_id, "email": session.email, "role": session.role}}

@router.get("/login")
def login_page(session: Optional[ConsoleSession] = Depends(get_console_session)):
    return {"page": "login", "authenticated": bool(session and session.is_admin)}

@router.post("/login", response_model=ConsoleLoginOut)
def console_login(body: LoginIn, request: Request, response: Response, db: Session = Depends(get_db)):
    user = login_or_401(db, body.email, body.password)
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    # hatırlanan yol bir kez kullanılır, sonra silinir
    target = route_guard.consume_redirect(CookieRedirectStore(request, response))
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        create_access_token(sub=user.email, role=user.role),
        httponly=True, samesite="lax", path="/",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return {"redirect_to": target, "user": user}

@router.post("/logout")
def console_logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    response.delete_cookie(settings.REDIRECT_COOKIE_NAME, path="/")
    return {"ok": True}

@router.get("")
def console_home(request: Request, session: Optional[ConsoleSession] = Depends(get_console_session)):
    return _guarded(request, session, "dashboard")

@router.get("/{page:path}")
def console_page(page: str, request: Request, session: Optional[ConsoleSession] = Depends(get_console_session)):
    return _guarded(request, session, page)
