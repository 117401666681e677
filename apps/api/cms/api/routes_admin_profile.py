from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cms.deps import get_db, RolesAllowed
from cms.models.models import User
from cms.schemas.user import ProfileOut, ProfileUpdateIn
from cms.services import user_service
from cms.services.user_service import EmailTaken

router = APIRouter(prefix="/api/admin/profile", tags=["admin_profile"])

@router.get("", response_model=ProfileOut)
def read_profile(user: User = Depends(RolesAllowed("admin"))):
    return user

@router.put("", response_model=ProfileOut)
def update_profile(body: ProfileUpdateIn, db: Session = Depends(get_db), user: User = Depends(RolesAllowed("admin"))):
    data = body.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        return user_service.update_profile(db, user, data)
    except EmailTaken as e:
        raise HTTPException(status_code=409, detail=str(e))
