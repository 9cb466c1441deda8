"""Tests for the YAML-backed translator."""

from datetime import datetime, timezone

import pytest

from conftest import FakeGuild, GUILD_ID
from modcase.localization.translator import Translator, case_url, format_expiry


@pytest.fixture
def locales(tmp_path):
    (tmp_path / "en.yml").write_text('greeting: "Hello {name}"\nonly_en: "English only"\n', encoding="utf-8")
    (tmp_path / "fr.yml").write_text('greeting: "Bonjour {name}"\n', encoding="utf-8")
    (tmp_path / "broken.yml").write_text("- just\n- a list\n", encoding="utf-8")
    return tmp_path


def test_loads_every_mapping_catalog(locales):
    translator = Translator(locales, "en")
    assert sorted(translator.languages) == ["en", "fr"]


def test_translation_in_requested_language(locales):
    translator = Translator(locales, "en")
    assert translator.t("greeting", "fr", name="Ana") == "Bonjour Ana"


def test_falls_back_to_default_language(locales):
    translator = Translator(locales, "en")
    assert translator.t("only_en", "fr") == "English only"
    assert translator.t("greeting", "xx", name="Bo") == "Hello Bo"


def test_missing_key_returns_key(locales):
    translator = Translator(locales, "en")
    assert translator.t("does_not_exist") == "does_not_exist"


def test_unknown_placeholder_is_kept(locales):
    translator = Translator(locales, "en")
    assert translator.t("greeting") == "Hello {name}"


def test_bundled_catalogs_share_keys():
    translator = Translator()
    en = {key for key in translator._catalogs["en"]}
    de = {key for key in translator._catalogs["de"]}
    assert en == de


def test_format_expiry_converts_timezone():
    value = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert format_expiry(value, "UTC") == "2030-01-01 12:00 (UTC)"
    assert format_expiry(value, "Europe/Berlin") == "2030-01-01 13:00 (Europe/Berlin)"


def test_format_expiry_unknown_zone_uses_utc():
    value = datetime(2030, 1, 1, 12, 0)
    assert format_expiry(value, "Mars/Olympus") == "2030-01-01 12:00 (UTC)"


def test_render_modcase_dm(translator, mod_case):
    mod_case.punished_until = datetime(2030, 5, 1, 8, 30, tzinfo=timezone.utc)
    text = translator.render_modcase_dm(
        "notification_modcase_dm_ban_temp",
        mod_case,
        FakeGuild(GUILD_ID, "Cozy Corner"),
        "$",
        "https://cases.example.org/",
        tz_name="UTC",
    )
    assert "**Cozy Corner**" in text
    assert "2030-05-01 08:30 (UTC)" in text
    assert case_url("https://cases.example.org/", mod_case) in text
