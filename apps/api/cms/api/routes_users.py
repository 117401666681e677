# apps/api/cms/api/routes_users.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cms.deps import get_db, get_current_user, RolesAllowed
from cms.models.models import User
from cms.schemas.user import UserCreateIn, UserUpdateIn, UserOut, PasswordChangeIn
from cms.services import user_service
from cms.services.admin_guard import InvariantViolation
from cms.services.user_service import EmailTaken

router = APIRouter(prefix="/api/users", tags=["users"])

@router.get("", response_model=list[UserOut], dependencies=[Depends(RolesAllowed("admin"))])
def list_users(limit: int = Query(200, ge=1, le=500), offset: int = Query(0, ge=0), db: Session = Depends(get_db)):
    return user_service.list_users(db, limit=limit, offset=offset)

# /{user_id}'den önce tanımlı olmalı
@router.get("/current", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user

@router.get("/{user_id}", response_model=UserOut, dependencies=[Depends(RolesAllowed("admin"))])
def get_user(user_id: int, db: Session = Depends(get_db)):
    u = user_service.get_user(db, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    return u

@router.post("", response_model=UserOut, status_code=201, dependencies=[Depends(RolesAllowed("admin"))])
def create_user(body: UserCreateIn, db: Session = Depends(get_db)):
    try:
        return user_service.create_user(
            db, email=body.email, password=body.password, role=body.role, name=body.name, is_active=body.is_active,
        )
    except EmailTaken as e:
        raise HTTPException(status_code=409, detail=str(e))

@router.put("/{user_id}", response_model=UserOut, dependencies=[Depends(RolesAllowed("admin"))])
def update_user(user_id: int, body: UserUpdateIn, db: Session = Depends(get_db)):
    data = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        u = user_service.update_user(db, user_id, data)
    except InvariantViolation as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EmailTaken as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    return u

@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), requester: User = Depends(RolesAllowed("admin"))):
    try:
        ok = user_service.delete_user(db, user_id, requester)
    except InvariantViolation as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not ok:
        raise HTTPException(status_code=404, detail="User not found")
    return {"ok": True, "message": "User deleted successfully"}

@router.put("/{user_id}/password")
def change_password(user_id: int, body: PasswordChangeIn, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    # admin herkesinkini, diğerleri sadece kendi şifresini değiştirebilir
    if user.role != "admin" and user.id != user_id:
        raise HTTPException(status_code=403, detail="Forbidden")
    if not user_service.set_password(db, user_id, body.new_password):
        raise HTTPException(status_code=404, detail="User not found")
    return {"ok": True, "message": "Password changed successfully"}
