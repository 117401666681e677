# apps/api/cms/api/routes_site_config.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from cms.deps import get_db, RolesAllowed
from cms.schemas.site_settings import SiteConfigOut
from cms.services import site_settings_service
from cms.services.site_config_service import (
    SettingDomain, UnknownField, load_namespace, load_site_config, write_namespace,
)
from cms.services.site_settings_service import InvalidSettingValue

router = APIRouter(prefix="/api/site-config", tags=["site_config"])

def _domain_or_404(domain: str) -> SettingDomain:
    try:
        return SettingDomain(domain)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"unknown settings domain: {domain}")

def _out(domain: SettingDomain, db: Session) -> SiteConfigOut:
    config, decoded = load_namespace(site_settings_service.get_all(db), domain)
    return SiteConfigOut(
        domain=domain.value,
        config=config.model_dump(mode="json"),
        fallbacks=decoded.fallbacks,
        failed=decoded.failed,
    )

@router.get("", response_model=Dict[str, Dict[str, Any]])
def read_all(db: Session = Depends(get_db)):
    return {d.value: c.model_dump(mode="json") for d, c in load_site_config(db).items()}

@router.get("/{domain}", response_model=SiteConfigOut)
def read_domain(domain: str, db: Session = Depends(get_db)):
    return _out(_domain_or_404(domain), db)

@router.put("/{domain}", response_model=SiteConfigOut, dependencies=[Depends(RolesAllowed("admin"))])
def write_domain(domain: str, body: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    d = _domain_or_404(domain)
    if not body:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        write_namespace(db, d, body)
    except (UnknownField, InvalidSettingValue) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _out(d, db)
