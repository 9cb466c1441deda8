"""
Wiring for the announcer.

The hosting service (API server, worker) opens one session at startup and
calls the announcer for every moderation event::

    async with announcer_session() as announcer:
        await announcer.announce_mod_case(mod_case, RestAction.CREATED, actor, True, True)
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from dotenv import load_dotenv

from modcase.announcer.discord_announcer import DiscordAnnouncer
from modcase.announcer.notification_embed_creator import NotificationEmbedCreator
from modcase.configuration.app_configuration import CONFIG_PATH, AppConfig
from modcase.database.db_connection import ConnectionManager
from modcase.discord_api.api_cache import DiscordAPICache
from modcase.discord_api.discord_api import DiscordAPIInterface
from modcase.localization.translator import Translator
from modcase.repositories.guild_config_repo import GuildConfigRepository
from modcase.util.logger import get_logger

logger = get_logger("bootstrap")


def load_environment(config_path: Path = CONFIG_PATH, dotenv_path: Path | None = None) -> AppConfig:
    """Load ``.env`` and the YAML config, resolving every setting once.

    Raises
    ------
    SystemExit
        If the required ``DISCORD_BOT_TOKEN`` variable is missing.
    """
    load_dotenv(dotenv_path=dotenv_path)
    config = AppConfig(config_path)
    if not config.bot_token:
        logger.critical("'DISCORD_BOT_TOKEN' environment variable not set. Announcer cannot start.")
        sys.exit(1)
    return config


def build_announcer(
    config: AppConfig,
    discord_api: DiscordAPIInterface,
    connection_manager: ConnectionManager,
) -> DiscordAnnouncer:
    """Assemble a :class:`DiscordAnnouncer` from already-created resources."""
    translator = Translator(config.locales_path, config.default_language)
    return DiscordAnnouncer(
        config=config,
        discord_api=discord_api,
        guild_configs=GuildConfigRepository(connection_manager),
        embed_creator=NotificationEmbedCreator(translator, config.base_url),
        translator=translator,
    )


@asynccontextmanager
async def announcer_session(config: AppConfig | None = None) -> AsyncIterator[DiscordAnnouncer]:
    """Open the database and the Discord client, yield an announcer, then close both."""
    config = config or load_environment()

    connection_manager = ConnectionManager()
    discord_api = DiscordAPIInterface(config.bot_token, DiscordAPICache(config.cache_ttl_seconds))

    await connection_manager.open(config.database_path)
    try:
        try:
            await discord_api.login()
            yield build_announcer(config, discord_api, connection_manager)
        finally:
            await discord_api.close()
    finally:
        await connection_manager.close()
