# apps/api/cms/api/routes_theme_settings.py
# Eski tema ekranının kullandığı düz yol; /api/site-config/theme ile aynı veri.
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from cms.deps import get_db, RolesAllowed
from cms.services import site_settings_service
from cms.services.site_config_service import SettingDomain, UnknownField, load_namespace, write_namespace
from cms.services.site_settings_service import InvalidSettingValue

router = APIRouter(prefix="/api/theme-settings", tags=["theme_settings"])

def _current(db: Session) -> Dict[str, Any]:
    config, _ = load_namespace(site_settings_service.get_all(db), SettingDomain.theme)
    return config.model_dump(mode="json")

@router.get("", response_model=Dict[str, Any])
def read_theme(db: Session = Depends(get_db)):
    return _current(db)

@router.put("", response_model=Dict[str, Any], dependencies=[Depends(RolesAllowed("admin"))])
def update_theme(body: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    if not body:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        write_namespace(db, SettingDomain.theme, body)
    except (UnknownField, InvalidSettingValue) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _current(db)
