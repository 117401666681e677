# apps/api/cms/db/models_site_settings.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, func
from cms.db.base import Base


class SettingType(str, enum.Enum):
    string = "string"
    json = "json"


class SiteSetting(Base):
    __tablename__ = "site_settings"
    id = Column(Integer, primary_key=True, autoincrement=True)
    setting_key = Column(String(191), unique=True, index=True, nullable=False)
    # her zaman JSON-encoded (string tipinde bile: '"Acme"', '"true"')
    setting_value = Column(Text, nullable=False)
    setting_type = Column(Enum(SettingType, name="setting_type"), nullable=False, default=SettingType.string)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
