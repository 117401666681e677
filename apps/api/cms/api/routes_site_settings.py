# apps/api/cms/api/routes_site_settings.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cms.deps import get_db, RolesAllowed
from cms.schemas.site_settings import SiteSettingOut, SiteSettingWriteIn, SiteSettingCreateIn
from cms.services import site_settings_service as store
from cms.services.site_settings_service import InvalidSettingValue

router = APIRouter(prefix="/api/site-settings", tags=["site_settings"])

@router.get("", response_model=List[SiteSettingOut])
def list_settings(db: Session = Depends(get_db)):
    return store.get_all(db)

@router.get("/{key}", response_model=SiteSettingOut)
def get_setting(key: str, db: Session = Depends(get_db)):
    row = store.get_by_key(db, key)
    if not row:
        raise HTTPException(status_code=404, detail="Setting not found")
    return row

# PUT de upsert: anahtar yoksa oluşturur (istemcinin PUT->404->POST denemesine gerek yok)
@router.put("/{key}", response_model=SiteSettingOut, dependencies=[Depends(RolesAllowed("admin"))])
def put_setting(key: str, body: SiteSettingWriteIn, db: Session = Depends(get_db)):
    try:
        return store.upsert(db, key, body.setting_value, body.setting_type)
    except InvalidSettingValue as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("", response_model=SiteSettingOut, status_code=201, dependencies=[Depends(RolesAllowed("admin"))])
def post_setting(body: SiteSettingCreateIn, db: Session = Depends(get_db)):
    try:
        return store.upsert(db, body.setting_key, body.setting_value, body.setting_type)
    except InvalidSettingValue as e:
        raise HTTPException(status_code=400, detail=str(e))
