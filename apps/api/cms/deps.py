from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from cms.core.config import settings
from cms.core.security import decode_access_token
from cms.db.session import get_db
from cms.models.models import User
from cms.services.route_guard import ConsoleSession

def _extract_token(request: Request) -> Optional[str]:
    # Önce 'Authorization: Bearer', yoksa konsol oturum cookie'si
    auth = request.headers.get("authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip()
    return request.cookies.get(settings.SESSION_COOKIE_NAME)

def _active_user(payload: dict, db: Session) -> Optional[User]:
    return db.query(User).filter(User.email == payload["sub"], User.is_active == True).first()

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    raw = _extract_token(request)
    if not raw:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
    payload = decode_access_token(raw)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token payload")
    user = _active_user(payload, db)
    if not user:
        raise HTTPException(status_code=401, detail="User inactive or not found")
    return user

def RolesAllowed(*roles: str):
    def dep(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user
    return dep

def get_console_session(request: Request, db: Session = Depends(get_db)) -> Optional[ConsoleSession]:
    """Konsol için: hata fırlatmaz, oturum yoksa None döner."""
    raw = request.cookies.get(settings.SESSION_COOKIE_NAME)
    payload = decode_access_token(raw) if raw else None
    user = _active_user(payload, db) if payload and payload.get("sub") else None
    if not user:
        return None
    return ConsoleSession(user_id=user.id, email=user.email, role=user.role)
