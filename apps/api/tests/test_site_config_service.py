import itertools
import json

import pytest

from cms.db.models_site_settings import SiteSetting, SettingType
from cms.schemas.site_config import AboutConfig, ContactConfig, SocialLinksConfig, AboutStat
from cms.services import site_settings_service as store
from cms.services.site_config_service import (
    NAMESPACES, FieldStatus, SettingDomain, UnknownField,
    decode_namespace, default_settings, encode_namespace, load_namespace, reconcile, write_namespace,
)


def row(key, value, setting_type=SettingType.string, raw=False):
    return SiteSetting(
        setting_key=key,
        setting_value=value if raw else json.dumps(value),
        setting_type=setting_type,
    )


def test_about_fields_are_decoded_by_prefix():
    rows = [
        row("about_hero_title", "Who we are"),
        row("about_hero_enabled", "false"),
        row("about_stats", [{"icon": "Users", "value": "10", "label": "People"}], SettingType.json),
    ]

    config, decoded = load_namespace(rows, SettingDomain.about)

    assert config.hero_title == "Who we are"
    assert config.hero_enabled is False
    assert config.stats == [AboutStat(icon="Users", value="10", label="People")]
    assert decoded.failed == []
    # dokunulmayan alanlar default
    assert config.vision_title == AboutConfig().vision_title
    assert "vision_title" in decoded.fallbacks
    assert "hero_title" not in decoded.fallbacks


def test_other_namespaces_do_not_leak_into_each_other():
    rows = [row("about_hero_title", "About hero"), row("hero_title", "Home hero"), row("contact_email", "x@acme.com")]

    about = decode_namespace(rows, SettingDomain.about)
    hero = decode_namespace(rows, SettingDomain.hero)

    assert about.values == {"hero_title": "About hero"}
    assert hero.values == {"title": "Home hero"}


def test_unknown_keys_are_ignored():
    rows = [row("contact_fax", "123"), row("totally_unrelated", "x"), row("contact_email", "a@acme.com")]

    decoded = decode_namespace(rows, SettingDomain.contact)

    assert decoded.values == {"email": "a@acme.com"}
    assert decoded.failed == []


def test_malformed_json_falls_back_for_that_field_only(capsys):
    rows = [
        row("about_timeline", "[{not json", SettingType.json, raw=True),
        row("about_journey_title", "Milestones"),
    ]

    config, decoded = load_namespace(rows, SettingDomain.about)

    assert config.timeline == AboutConfig().timeline
    assert config.journey_title == "Milestones"
    assert decoded.failed == ["timeline"]
    assert decoded.outcomes["timeline"].status == FieldStatus.failed
    assert "timeline" in decoded.fallbacks
    assert "[site-settings] decode failed key=about_timeline" in capsys.readouterr().out


def test_boolean_field_rejects_non_boolean_text():
    decoded = decode_namespace([row("header_show_theme_toggle", "maybe")], SettingDomain.header)

    assert decoded.failed == ["show_theme_toggle"]


def test_boolean_field_accepts_real_booleans():
    decoded = decode_namespace([row("header_show_theme_toggle", True, SettingType.json)], SettingDomain.header)

    assert decoded.values == {"show_theme_toggle": True}


def test_string_setting_holding_a_list_is_a_decode_failure():
    decoded = decode_namespace([row("contact_address", ["a", "b"], SettingType.string)], SettingDomain.contact)

    assert decoded.failed == ["address"]


def test_numbers_pass_through_as_text_for_string_fields():
    decoded = decode_namespace([row("hero_stats_years", 25)], SettingDomain.hero)

    assert decoded.values == {"stats_years": "25"}


def test_json_field_with_wrong_shape_falls_back():
    decoded = decode_namespace([row("about_stats", {"icon": "x"}, SettingType.json)], SettingDomain.about)

    assert decoded.failed == ["stats"]


def test_social_links_bare_key_decodes_each_member():
    rows = [row("social_links", {"facebook": "https://fb.com/acme", "twitter": 5, "myspace": "x"}, SettingType.json)]

    config, decoded = load_namespace(rows, SettingDomain.social_links)

    assert config.facebook == "https://fb.com/acme"
    assert config.twitter == "5"
    assert config.linkedin == ""
    assert "myspace" not in decoded.outcomes


def test_social_links_not_an_object_falls_back_entirely():
    config, decoded = load_namespace([row("social_links", "oops", SettingType.json)], SettingDomain.social_links)

    assert config == SocialLinksConfig()
    assert decoded.failed == sorted(SocialLinksConfig.model_fields)


def test_no_rows_gives_complete_defaults():
    for domain, ns in NAMESPACES.items():
        config, decoded = load_namespace([], domain)
        assert config == ns.model()
        assert decoded.fallbacks == list(ns.model.model_fields)


def test_reconcile_is_total_for_every_subset_of_fields():
    defaults = ContactConfig()
    overrides = {"email": "o@acme.com", "phone": "1", "address": "Main St", "hours": "24/7"}

    for n in range(len(overrides) + 1):
        for names in itertools.combinations(overrides, n):
            decoded = {k: overrides[k] for k in names}
            merged = reconcile(defaults, decoded)
            for field in ContactConfig.model_fields:
                expected = decoded[field] if field in decoded else getattr(defaults, field)
                assert getattr(merged, field) == expected


def test_reconcile_ignores_unknown_names_and_keeps_defaults_intact():
    defaults = ContactConfig()
    merged = reconcile(defaults, {"fax": "1", "email": "n@acme.com"})

    assert merged.email == "n@acme.com"
    assert not hasattr(merged, "fax")
    assert defaults.email == ContactConfig().email


def test_encode_namespace_uses_key_convention():
    items = encode_namespace(SettingDomain.about, {
        "hero_title": "T",
        "hero_enabled": False,
        "stats": [{"icon": "Globe", "value": "3", "label": "Countries"}],
    })

    assert items == [
        ("about_hero_title", "T", SettingType.string),
        ("about_hero_enabled", "false", SettingType.string),
        ("about_stats", [{"icon": "Globe", "value": "3", "label": "Countries"}], SettingType.json),
    ]


def test_encode_namespace_rejects_unknown_fields():
    with pytest.raises(UnknownField):
        encode_namespace(SettingDomain.contact, {"fax": "1"})


def test_encode_namespace_rejects_bad_types():
    with pytest.raises(store.InvalidSettingValue):
        encode_namespace(SettingDomain.about, {"stats": "not a list"})


def test_write_then_load_namespace(db):
    write_namespace(db, SettingDomain.header, {"company_name": "Acme", "show_services_dropdown": False})

    config, decoded = load_namespace(store.get_all(db), SettingDomain.header)

    assert config.company_name == "Acme"
    assert config.show_services_dropdown is False
    assert decoded.failed == []


def test_write_social_links_merges_with_stored_object(db):
    write_namespace(db, SettingDomain.social_links, {"facebook": "fb"})
    write_namespace(db, SettingDomain.social_links, {"linkedin": "li"})

    config, _ = load_namespace(store.get_all(db), SettingDomain.social_links)

    assert config.facebook == "fb"
    assert config.linkedin == "li"
    assert len(store.get_all(db)) == 1


def test_default_settings_cover_every_domain():
    keys = {k for k, _, _ in default_settings()}

    assert "social_links" in keys
    assert "about_timeline" in keys
    assert "contact_hours" in keys
    assert "footer_text" in keys
    assert {"site_title", "site_description"} <= keys
    assert {"theme_mode", "primary_color", "astro_accent"} <= keys


def test_theme_uses_explicit_key_map():
    rows = [
        row("theme_mode", "dark"),
        row("primary_color", "#000000"),
        row("astro_gold", "{oops", raw=True),
        row("theme_primary_color", "#ffffff"),
    ]

    config, decoded = load_namespace(rows, SettingDomain.theme)

    assert config.theme == "dark"
    assert config.primary_color == "#000000"
    assert config.astro_gold == "#f0a500"
    assert decoded.failed == ["astro_gold"]


def test_theme_mode_outside_known_values_falls_back():
    config, decoded = load_namespace([row("theme_mode", "sepia")], SettingDomain.theme)

    assert config.theme == "auto"
    assert decoded.failed == ["theme"]


def test_theme_keys_do_not_leak_into_other_domains():
    rows = [row("primary_color", "#000000"), row("site_title", "Acme")]

    assert decode_namespace(rows, SettingDomain.site).values == {"title": "Acme"}
    assert decode_namespace(rows, SettingDomain.theme).values == {"primary_color": "#000000"}


def test_write_theme_uses_legacy_keys(db):
    write_namespace(db, SettingDomain.theme, {"theme": "light", "astro_accent": "#123456"})

    stored = {r.setting_key: r for r in store.get_all(db)}
    assert set(stored) == {"theme_mode", "astro_accent"}
    assert json.loads(stored["theme_mode"].setting_value) == "light"
    assert stored["theme_mode"].setting_type == SettingType.string
