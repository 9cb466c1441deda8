"""
Persistent storage for per-guild notification settings.

``GuildConfigRepo`` is the low-level CRUD over a connection;
``GuildConfigRepository`` is what the announcer is handed. It reads the row on
every call so webhook changes made through the web UI take effect on the next
notification.
"""

from __future__ import annotations

from typing import Optional

import aiosqlite

from modcase.database.db_connection import ConnectionManager
from modcase.datatypes.discord_datatypes import GuildID
from modcase.datatypes.guild_config import DEFAULT_LANGUAGE, GuildConfig
from modcase.errors import GuildUnregisteredError
from modcase.util.logger import get_logger

logger = get_logger("guild_config_repo")


def _clean_url(url: Optional[str]) -> Optional[str]:
    if url is None:
        return None
    url = url.strip()
    return url or None


class GuildConfigRepo:
    """Low-level CRUD for the ``guild_configs`` table."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    async def upsert(conn: aiosqlite.Connection, config: GuildConfig) -> None:
        """Insert or replace the row of ``config.guild_id``."""
        await conn.execute(
            """
            INSERT INTO guild_configs (
                guild_id, mod_public_notification_webhook,
                mod_internal_notification_webhook, preferred_language
            )
            VALUES (?, ?, ?, ?)
            ON CONFLICT(guild_id) DO UPDATE SET
                mod_public_notification_webhook   = excluded.mod_public_notification_webhook,
                mod_internal_notification_webhook = excluded.mod_internal_notification_webhook,
                preferred_language                = excluded.preferred_language
            """,
            (
                config.guild_id.to_int(),
                _clean_url(config.mod_public_notification_webhook),
                _clean_url(config.mod_internal_notification_webhook),
                config.preferred_language or DEFAULT_LANGUAGE,
            ),
        )

    @staticmethod
    async def delete(conn: aiosqlite.Connection, guild_id: GuildID) -> None:
        await conn.execute("DELETE FROM guild_configs WHERE guild_id = ?", (guild_id.to_int(),))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @staticmethod
    async def get(conn: aiosqlite.Connection, guild_id: GuildID) -> Optional[GuildConfig]:
        """Return the stored config, or None when the guild is not registered."""
        cursor = await conn.execute(
            "SELECT guild_id, mod_public_notification_webhook, mod_internal_notification_webhook, "
            "preferred_language FROM guild_configs WHERE guild_id = ?",
            (guild_id.to_int(),),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return GuildConfig(
            guild_id=GuildID(row[0]),
            mod_public_notification_webhook=row[1],
            mod_internal_notification_webhook=row[2],
            preferred_language=row[3] or DEFAULT_LANGUAGE,
        )


class GuildConfigRepository:
    """Guild config access bound to an open :class:`ConnectionManager`."""

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager

    async def get_guild_config(self, guild_id: GuildID) -> GuildConfig:
        """
        Load the config of a guild.

        Raises:
            GuildUnregisteredError: If no config row exists for the guild.
        """
        async with self._connection_manager.read() as conn:
            config = await GuildConfigRepo.get(conn, guild_id)
        if config is None:
            raise GuildUnregisteredError(f"Guild {guild_id} is not registered")
        return config

    async def set_guild_config(self, config: GuildConfig) -> None:
        async with self._connection_manager.transaction() as conn:
            await GuildConfigRepo.upsert(conn, config)
        logger.info("[GUILD CONFIG] Stored config for guild %s", config.guild_id)

    async def delete_guild_config(self, guild_id: GuildID) -> None:
        async with self._connection_manager.transaction() as conn:
            await GuildConfigRepo.delete(conn, guild_id)
        logger.info("[GUILD CONFIG] Deleted config for guild %s", guild_id)
