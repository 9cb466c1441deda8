"""
Per-guild notification settings.

Database schema:
- guild_configs table with columns: guild_id, mod_public_notification_webhook,
  mod_internal_notification_webhook, preferred_language
"""

from dataclasses import dataclass
from typing import Optional

from modcase.datatypes.discord_datatypes import GuildID

DEFAULT_LANGUAGE = "en"


def _is_set(url: Optional[str]) -> bool:
    return bool(url and url.strip())


@dataclass(slots=True)
class GuildConfig:
    """Notification targets configured for one guild."""

    guild_id: GuildID
    mod_public_notification_webhook: Optional[str] = None
    mod_internal_notification_webhook: Optional[str] = None
    preferred_language: str = DEFAULT_LANGUAGE

    @property
    def has_public_webhook(self) -> bool:
        return _is_set(self.mod_public_notification_webhook)

    @property
    def has_internal_webhook(self) -> bool:
        return _is_set(self.mod_internal_notification_webhook)
