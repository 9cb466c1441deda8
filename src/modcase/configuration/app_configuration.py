from __future__ import annotations
from pathlib import Path
import fcntl
import os
from typing import Any, Dict, Mapping
import yaml

from modcase.datatypes.guild_config import DEFAULT_LANGUAGE
from modcase.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_PREFIX = "$"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_CACHE_TTL_SECONDS = 300.0


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    Reads ``./config/app_config.yml`` once and resolves the environment
    overrides (``DISCORD_PREFIX``, ``DISCORD_BOT_TOKEN``) at construction time,
    so components receiving the instance never consult ``os.environ`` on their
    own.
    """

    def __init__(self, config_path: Path = CONFIG_PATH, environ: Mapping[str, str] | None = None) -> None:
        self.config_path = config_path
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                try:
                    data = yaml.safe_load(f)
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found, using defaults.", self.config_path)
            return {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("[APP CONFIGURATION] Config %s is not a mapping, ignoring it.", self.config_path)
            return {}
        return data

    def _env(self, name: str) -> str | None:
        value = self._environ.get(name)
        return value if value else None

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Re-read the YAML file and re-resolve environment overrides."""
        self._data = self.load_from_disk()
        self._prefix = self._env("DISCORD_PREFIX") or str(self._data.get("discord_prefix") or DEFAULT_PREFIX)
        self._bot_token = self._env("DISCORD_BOT_TOKEN")
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def bot_token(self) -> str | None:
        return self._bot_token

    @property
    def discord_prefix(self) -> str:
        """Command prefix quoted in DM templates."""
        return self._prefix

    @property
    def base_url(self) -> str:
        """Web UI root used for links in messages, without trailing slash."""
        return str(self._data.get("base_url") or "").rstrip("/")

    @property
    def default_language(self) -> str:
        return str(self._data.get("default_language") or DEFAULT_LANGUAGE)

    @property
    def dm_timezone(self) -> str:
        """Timezone used to print the expiry of temporary punishments."""
        return str(self._data.get("dm_timezone") or DEFAULT_TIMEZONE)

    @property
    def database_path(self) -> Path:
        return Path(self._data.get("database_path") or "./data/modcase.db").resolve()

    @property
    def locales_path(self) -> Path:
        value = self._data.get("locales_path")
        if value:
            return Path(value).resolve()
        return Path(__file__).resolve().parents[1] / "localization" / "locales"

    @property
    def cache_ttl_seconds(self) -> float:
        try:
            return float(self._data.get("cache_ttl_seconds", DEFAULT_CACHE_TTL_SECONDS))
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid cache_ttl_seconds, using %s", DEFAULT_CACHE_TTL_SECONDS)
            return DEFAULT_CACHE_TTL_SECONDS
