# apps/api/cms/services/site_settings_service.py
from __future__ import annotations
import json
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from cms.db.models_site_settings import SiteSetting, SettingType

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
    "mysql": mysql_insert,
    "mariadb": mysql_insert,
}


class InvalidSettingValue(ValueError):
    pass


# ---------------- Encoding ----------------

def encode_value(value: Any, setting_type: SettingType) -> str:
    """
    Every stored value is strict JSON (no NaN/Infinity) regardless of its declared type.
    A `string` setting may only hold a JSON scalar; lists and objects need `json`.
    """
    setting_type = SettingType(setting_type)
    if setting_type == SettingType.string and isinstance(value, (list, dict)):
        raise InvalidSettingValue("string settings must hold a scalar value; use setting_type 'json'")
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidSettingValue(f"value is not JSON serializable: {e}")


# ---------------- Reads ----------------

def get_all(db: Session) -> List[SiteSetting]:
    return list(db.scalars(select(SiteSetting).order_by(SiteSetting.setting_key)))


def get_by_key(db: Session, key: str) -> Optional[SiteSetting]:
    return db.scalars(select(SiteSetting).where(SiteSetting.setting_key == key)).first()


# ---------------- Writes ----------------

def _upsert_stmt(db: Session, key: str, encoded: str, setting_type: SettingType, overwrite: bool = True):
    dialect = db.get_bind().dialect.name
    if dialect not in _INSERTS:
        raise RuntimeError(f"upsert not supported for dialect {dialect!r}")
    stmt = _INSERTS[dialect](SiteSetting).values(
        setting_key=key,
        setting_value=encoded,
        setting_type=setting_type,
        updated_at=func.now(),
    )
    if dialect in ("mysql", "mariadb"):
        # ON DUPLICATE KEY UPDATE
        if overwrite:
            return stmt.on_duplicate_key_update(
                setting_value=stmt.inserted.setting_value,
                setting_type=stmt.inserted.setting_type,
                updated_at=func.now(),
            )
        return stmt.prefix_with("IGNORE")
    if overwrite:
        return stmt.on_conflict_do_update(
            index_elements=[SiteSetting.setting_key],
            set_={
                "setting_value": stmt.excluded.setting_value,
                "setting_type": stmt.excluded.setting_type,
                "updated_at": func.now(),
            },
        )
    return stmt.on_conflict_do_nothing(index_elements=[SiteSetting.setting_key])


def upsert(db: Session, key: str, value: Any, setting_type: SettingType = SettingType.string, commit: bool = True) -> SiteSetting:
    """
    Create-or-update in a single INSERT ... ON CONFLICT statement, so two
    writers racing on a new key can never both insert it.
    """
    setting_type = SettingType(setting_type)
    encoded = encode_value(value, setting_type)
    db.execute(_upsert_stmt(db, key, encoded, setting_type))
    if commit:
        db.commit()
    else:
        db.flush()
    row = get_by_key(db, key)
    db.refresh(row)
    return row


def upsert_many(db: Session, items: Iterable[Tuple[str, Any, SettingType]]) -> List[SiteSetting]:
    """Tek transaction içinde birden fazla anahtar yazar."""
    keys = []
    try:
        for key, value, setting_type in items:
            setting_type = SettingType(setting_type)
            db.execute(_upsert_stmt(db, key, encode_value(value, setting_type), setting_type))
            keys.append(key)
        db.commit()
    except Exception:
        db.rollback()
        raise
    rows = []
    for key in keys:
        row = get_by_key(db, key)
        db.refresh(row)
        rows.append(row)
    return rows


def insert_missing(db: Session, items: Iterable[Tuple[str, Any, SettingType]]) -> int:
    """
    Sadece olmayan anahtarları ekler (operatörün değiştirdiği değerlere dokunmaz).
    Returns how many keys were missing before the call.
    """
    items = list(items)
    existing = {k for (k,) in db.execute(select(SiteSetting.setting_key))}
    for key, value, setting_type in items:
        setting_type = SettingType(setting_type)
        db.execute(_upsert_stmt(db, key, encode_value(value, setting_type), setting_type, overwrite=False))
    db.commit()
    return len([k for k, _, _ in items if k not in existing])
