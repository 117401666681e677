from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cms.core.security import create_access_token
from cms.deps import get_db, get_current_user
from cms.models.models import User
from cms.schemas.auth import LoginIn, TokenOut
from cms.schemas.user import UserOut
from cms.services import user_service

router = APIRouter(prefix="/api/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"
ACCOUNT_DEACTIVATED = "Account is deactivated. Please contact an administrator."

def login_or_401(db: Session, email: str, password: str) -> User:
    user = user_service.authenticate(db, email, password)
    if not user:
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)
    if not user.is_active:
        raise HTTPException(status_code=401, detail=ACCOUNT_DEACTIVATED)
    return user

@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, db: Session = Depends(get_db)):
    user = login_or_401(db, body.email, body.password)
    token = create_access_token(sub=user.email, role=user.role)
    return {"access_token": token, "user": user}

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
