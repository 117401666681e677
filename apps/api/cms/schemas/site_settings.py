from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from cms.db.models_site_settings import SettingType

class SiteSettingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    setting_key: str
    setting_value: str   # JSON-encoded ham değer
    setting_type: SettingType
    updated_at: datetime | None = None

class SiteSettingWriteIn(BaseModel):
    setting_value: Any = None
    setting_type: SettingType = SettingType.string

class SiteSettingCreateIn(SiteSettingWriteIn):
    setting_key: str = Field(min_length=1, max_length=191)

class SiteConfigOut(BaseModel):
    domain: str
    config: Dict[str, Any]
    fallbacks: List[str]
    failed: List[str]
