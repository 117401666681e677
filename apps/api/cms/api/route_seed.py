# apps/api/cms/api/route_seed.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cms.core.config import settings
from cms.deps import get_db
from cms.schemas.auth import LoginIn
from cms.schemas.user import UserOut
from cms.services import admin_guard, user_service

router = APIRouter(prefix="/seed", tags=["seed"])

def _expect_secret(secret: str):
    expected = settings.SEED_SECRET
    if not expected or secret != expected:
        raise HTTPException(status_code=401, detail="invalid seed secret")

@router.post("/admin", response_model=UserOut, status_code=201)
def seed_first_admin(body: LoginIn, secret: str = Query(...), db: Session = Depends(get_db)):
    """
    İlk admin kullanıcısını oluşturur. Herhangi bir admin (aktif/pasif) varsa reddeder;
    sonrasında adminler sadece /api/users üzerinden yönetilir.
    """
    _expect_secret(secret)
    with admin_guard.admin_mutation_lock(db):
        if user_service.count_admins(db) > 0:
            raise HTTPException(status_code=409, detail="an admin user already exists")
        try:
            u = user_service.create_user(db, email=body.email, password=body.password, role=admin_guard.ADMIN_ROLE, name="Administrator")
        except user_service.EmailTaken as e:
            raise HTTPException(status_code=409, detail=str(e))
    print(f"[seed] first admin created: {u.email}")
    return u
