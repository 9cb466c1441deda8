"""
Localized message catalogs.

Each ``locales/<language>.yml`` file maps message keys to ``str.format``
templates. Lookups fall back to the default language, then to the key itself,
so a missing translation degrades to a readable placeholder instead of an error.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from modcase.datatypes.case_datatypes import ModCase
from modcase.datatypes.guild_config import DEFAULT_LANGUAGE
from modcase.util.logger import get_logger

logger = get_logger("translator")

LOCALES_DIR = Path(__file__).resolve().parent / "locales"
EXPIRY_FORMAT = "%Y-%m-%d %H:%M"


class _SafeDict(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def format_expiry(value: datetime, tz_name: Optional[str]) -> str:
    """Render an expiry timestamp in ``tz_name`` (UTC for unknown or missing zones)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    tz_name = tz_name or "UTC"
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("[TRANSLATOR] Unknown timezone %r, falling back to UTC", tz_name)
        zone, tz_name = ZoneInfo("UTC"), "UTC"
    return f"{value.astimezone(zone).strftime(EXPIRY_FORMAT)} ({tz_name})"


def case_url(base_url: str, mod_case: ModCase) -> str:
    return f"{base_url.rstrip('/')}/guilds/{mod_case.guild_id}/cases/{mod_case.case_id}"


class Translator:
    """Loads every catalog in ``locales_dir`` and renders keys on demand."""

    def __init__(self, locales_dir: Path = LOCALES_DIR, default_language: str = DEFAULT_LANGUAGE) -> None:
        self.locales_dir = locales_dir
        self.default_language = default_language
        self._catalogs: Dict[str, Dict[str, str]] = {}
        self.reload()

    def reload(self) -> None:
        catalogs: Dict[str, Dict[str, str]] = {}
        for path in sorted(self.locales_dir.glob("*.yml")):
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                logger.warning("[TRANSLATOR] Ignoring %s: not a mapping", path.name)
                continue
            catalogs[path.stem] = {str(k): str(v) for k, v in data.items()}

        if self.default_language not in catalogs:
            logger.warning("[TRANSLATOR] No catalog for default language %r in %s", self.default_language, self.locales_dir)
        self._catalogs = catalogs
        logger.debug("[TRANSLATOR] Loaded languages: %s", ", ".join(catalogs) or "none")

    @property
    def languages(self) -> list[str]:
        return list(self._catalogs)

    def _lookup(self, key: str, language: Optional[str]) -> str:
        for lang in (language, self.default_language):
            if lang and key in self._catalogs.get(lang, {}):
                return self._catalogs[lang][key]
        logger.warning("[TRANSLATOR] Missing message key %r", key)
        return key

    def t(self, key: str, language: Optional[str] = None, **values: Any) -> str:
        """Render ``key`` in ``language``; unknown placeholders are left untouched."""
        return self._lookup(key, language).format_map(_SafeDict(values))

    def render_modcase_dm(
        self,
        template_key: str,
        mod_case: ModCase,
        guild: Any,
        prefix: str,
        base_url: str,
        tz_name: Optional[str] = None,
        language: Optional[str] = None,
    ) -> str:
        """Render one of the ``notification_modcase_dm_*`` templates for a case."""
        values: Dict[str, Any] = {
            "guild_name": getattr(guild, "name", str(mod_case.guild_id)),
            "case_id": mod_case.case_id,
            "title": mod_case.title,
            "prefix": prefix,
            "case_url": case_url(base_url, mod_case),
        }
        if mod_case.punished_until is not None:
            values["punished_until"] = format_expiry(mod_case.punished_until, tz_name)
        return self.t(template_key, language, **values)
