# apps/api/cms/services/site_config_service.py
"""
site_settings satırlarını (düz key/value) domain bazlı config nesnelerine çevirir.

Every known domain is declared once in NAMESPACES: its key prefix (or bare
key, or an explicit field-to-key map), and the pydantic model that lists its fields, field types and defaults.
Decoding is per field; a value that fails to decode is reported in the
outcome and the field falls back to its default, the rest of the domain
still loads.
"""
from __future__ import annotations
import enum
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from cms.db.models_site_settings import SiteSetting, SettingType
from cms.schemas.site_config import (
    AboutConfig, ContactConfig, HeroConfig, HeaderConfig, FooterConfig, SiteConfig, SocialLinksConfig, ThemeConfig,
)
from cms.services import site_settings_service

T = TypeVar("T", bound=BaseModel)


class SettingDomain(str, enum.Enum):
    about = "about"
    contact = "contact"
    hero = "hero"
    header = "header"
    footer = "footer"
    site = "site"
    social_links = "social_links"
    theme = "theme"


@dataclass(frozen=True)
class Namespace:
    domain: SettingDomain
    model: Type[BaseModel]
    prefix: Optional[str] = None      # "about_" -> about_hero_title => hero_title
    bare_key: Optional[str] = None    # tek JSON obje tutan anahtar (social_links)
    keys: Optional[Mapping[str, str]] = None  # alan -> anahtar, prefix'siz eski anahtarlar (theme)

    def field_for(self, key: str) -> Optional[str]:
        if self.keys is not None:
            return next((name for name, k in self.keys.items() if k == key), None)
        if self.prefix is None or not key.startswith(self.prefix):
            return None
        name = key[len(self.prefix):]
        return name if name in self.model.model_fields else None

    def key_for(self, name: str) -> str:
        if self.keys is not None:
            return self.keys[name]
        return f"{self.prefix}{name}"


NAMESPACES: Dict[SettingDomain, Namespace] = {
    SettingDomain.about: Namespace(SettingDomain.about, AboutConfig, prefix="about_"),
    SettingDomain.contact: Namespace(SettingDomain.contact, ContactConfig, prefix="contact_"),
    SettingDomain.hero: Namespace(SettingDomain.hero, HeroConfig, prefix="hero_"),
    SettingDomain.header: Namespace(SettingDomain.header, HeaderConfig, prefix="header_"),
    SettingDomain.footer: Namespace(SettingDomain.footer, FooterConfig, prefix="footer_"),
    SettingDomain.site: Namespace(SettingDomain.site, SiteConfig, prefix="site_"),
    SettingDomain.social_links: Namespace(SettingDomain.social_links, SocialLinksConfig, bare_key="social_links"),
    SettingDomain.theme: Namespace(SettingDomain.theme, ThemeConfig, keys={
        "theme": "theme_mode",
        "primary_color": "primary_color",
        "accent_color": "accent_color",
        "astro_blue": "astro_blue",
        "astro_gold": "astro_gold",
        "astro_white": "astro_white",
        "astro_accent": "astro_accent",
    }),
}


# ---------------- Decode outcomes ----------------

class FieldStatus(str, enum.Enum):
    decoded = "decoded"
    failed = "failed"


@dataclass(frozen=True)
class FieldOutcome:
    name: str
    key: str
    status: FieldStatus
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == FieldStatus.decoded


@dataclass
class DecodedNamespace:
    domain: SettingDomain
    outcomes: Dict[str, FieldOutcome] = field(default_factory=dict)

    @property
    def values(self) -> Dict[str, Any]:
        return {n: o.value for n, o in self.outcomes.items() if o.ok}

    @property
    def failed(self) -> List[str]:
        return sorted(n for n, o in self.outcomes.items() if not o.ok)

    @property
    def fallbacks(self) -> List[str]:
        """Fields that end up with their default value (absent or failed)."""
        decoded = self.values
        return [n for n in NAMESPACES[self.domain].model.model_fields if n not in decoded]


def _fail(name: str, key: str, error: str) -> FieldOutcome:
    print(f"[site-settings] decode failed key={key} field={name}: {error}")
    return FieldOutcome(name=name, key=key, status=FieldStatus.failed, error=error)


def _coerce(model: Type[BaseModel], name: str, key: str, value: Any, setting_type: SettingType) -> FieldOutcome:
    annotation = model.model_fields[name].annotation

    if annotation is bool:
        # string tipinde "true"/"false" olarak saklanır
        if isinstance(value, bool):
            return FieldOutcome(name, key, FieldStatus.decoded, value)
        if value in ("true", "false"):
            return FieldOutcome(name, key, FieldStatus.decoded, value == "true")
        return _fail(name, key, f"expected boolean, got {value!r}")

    if setting_type == SettingType.string and isinstance(value, (list, dict)):
        return _fail(name, key, "string setting holds a structured value")

    if annotation is str and isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)

    try:
        decoded = TypeAdapter(annotation).validate_python(value)
    except ValidationError as e:
        return _fail(name, key, f"{e.error_count()} validation error(s)")
    return FieldOutcome(name, key, FieldStatus.decoded, decoded)


def _parse(raw: str) -> Tuple[bool, Any, Optional[str]]:
    try:
        return True, json.loads(raw), None
    except (TypeError, ValueError) as e:
        return False, None, f"malformed JSON: {e}"


def decode_namespace(rows: Iterable[SiteSetting], domain: SettingDomain) -> DecodedNamespace:
    ns = NAMESPACES[SettingDomain(domain)]
    out = DecodedNamespace(domain=ns.domain)

    for row in rows:
        key = row.setting_key
        setting_type = SettingType(row.setting_type)

        if ns.bare_key is not None:
            if key != ns.bare_key:
                continue
            ok, blob, err = _parse(row.setting_value)
            if not ok or not isinstance(blob, dict):
                # bütün obje okunamadı; tüm alanlar default'a düşer
                for name in ns.model.model_fields:
                    out.outcomes[name] = _fail(name, key, err or "expected a JSON object")
                continue
            for name, value in blob.items():
                if name in ns.model.model_fields:
                    out.outcomes[name] = _coerce(ns.model, name, key, value, SettingType.json)
            continue

        name = ns.field_for(key)
        if name is None:
            continue
        ok, value, err = _parse(row.setting_value)
        if not ok:
            out.outcomes[name] = _fail(name, key, err)
            continue
        out.outcomes[name] = _coerce(ns.model, name, key, value, setting_type)

    return out


# ---------------- Reconcile ----------------

def reconcile(defaults: T, decoded: Mapping[str, Any]) -> T:
    """
    Shallow merge: fields present in `decoded` override `defaults`, every other
    field keeps its default. Unknown names are ignored.
    """
    known = type(defaults).model_fields
    return defaults.model_copy(update={k: v for k, v in decoded.items() if k in known})


def load_namespace(rows: Iterable[SiteSetting], domain: SettingDomain) -> Tuple[BaseModel, DecodedNamespace]:
    ns = NAMESPACES[SettingDomain(domain)]
    decoded = decode_namespace(rows, ns.domain)
    return reconcile(ns.model(), decoded.values), decoded


def load_site_config(db: Session) -> Dict[SettingDomain, BaseModel]:
    rows = site_settings_service.get_all(db)
    return {d: load_namespace(rows, d)[0] for d in SettingDomain}


# ---------------- Encode (write path) ----------------

class UnknownField(ValueError):
    pass


def _is_structured(annotation: Any) -> bool:
    if get_origin(annotation) in (list, dict):
        return True
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def encode_namespace(domain: SettingDomain, payload: Mapping[str, Any]) -> List[Tuple[str, Any, SettingType]]:
    """
    Config alanlarını tekrar (key, value, type) üçlülerine çevirir.
    Booleans are written as "true"/"false" strings, lists/objects as json.
    Values are validated against the field type before anything is written.
    """
    ns = NAMESPACES[SettingDomain(domain)]
    fields = ns.model.model_fields
    unknown = sorted(set(payload) - set(fields))
    if unknown:
        raise UnknownField(f"unknown field(s) for {ns.domain.value}: {', '.join(unknown)}")

    clean: Dict[str, Any] = {}
    for name, value in payload.items():
        try:
            typed = TypeAdapter(fields[name].annotation).validate_python(value)
        except ValidationError as e:
            raise site_settings_service.InvalidSettingValue(f"{name}: {e.errors()[0]['msg']}")
        clean[name] = TypeAdapter(fields[name].annotation).dump_python(typed, mode="json")

    if ns.bare_key is not None:
        if not clean:
            return []
        return [(ns.bare_key, clean, SettingType.json)]

    items: List[Tuple[str, Any, SettingType]] = []
    for name, value in clean.items():
        annotation = fields[name].annotation
        if annotation is bool:
            items.append((ns.key_for(name), "true" if value else "false", SettingType.string))
        elif _is_structured(annotation):
            items.append((ns.key_for(name), value, SettingType.json))
        else:
            items.append((ns.key_for(name), value, SettingType.string))
    return items


def write_namespace(db: Session, domain: SettingDomain, payload: Mapping[str, Any]) -> List[SiteSetting]:
    ns = NAMESPACES[SettingDomain(domain)]
    if ns.bare_key is not None and payload:
        # tek obje: eksik alanları mevcut değerle doldur ki yazım kısmi güncelleme olsun
        current, _ = load_namespace(site_settings_service.get_all(db), ns.domain)
        payload = {**current.model_dump(mode="json"), **payload}
    return site_settings_service.upsert_many(db, encode_namespace(ns.domain, payload))


def default_settings() -> List[Tuple[str, Any, SettingType]]:
    """Startup seed: her domain için default değerlerin anahtar listesi."""
    items: List[Tuple[str, Any, SettingType]] = []
    for d, ns in NAMESPACES.items():
        items.extend(encode_namespace(d, ns.model().model_dump(mode="json")))
    return items
