"""
Pytest configuration and fixtures for modcase tests.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src directory to path so imports work without an install
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from modcase.announcer.discord_announcer import DiscordAnnouncer  # noqa: E402
from modcase.announcer.notification_embed_creator import NotificationEmbedCreator  # noqa: E402
from modcase.configuration.app_configuration import AppConfig  # noqa: E402
from modcase.datatypes.case_datatypes import ModCase, PunishmentType  # noqa: E402
from modcase.datatypes.discord_datatypes import GuildID, UserID  # noqa: E402
from modcase.datatypes.guild_config import GuildConfig  # noqa: E402
from modcase.localization.translator import Translator  # noqa: E402

GUILD_ID = 111111111111111111
USER_ID = 222222222222222222
MODERATOR_ID = 333333333333333333
BASE_URL = "https://cases.example.org"
PUBLIC_WEBHOOK = "https://discord.com/api/webhooks/1/public"
INTERNAL_WEBHOOK = "https://discord.com/api/webhooks/2/internal"


class FakeUser:
    def __init__(self, user_id: int, name: str = "user") -> None:
        self.id = user_id
        self.name = name
        self.mention = f"<@{user_id}>"

    def __str__(self) -> str:
        return self.name


class FakeGuild:
    def __init__(self, guild_id: int, name: str = "Test Guild") -> None:
        self.id = guild_id
        self.name = name


class FakeGuildConfigs:
    """In-memory stand-in for GuildConfigRepository counting lookups."""

    def __init__(self, config: GuildConfig) -> None:
        self.config = config
        self.calls = 0

    async def get_guild_config(self, guild_id):
        self.calls += 1
        return self.config


@pytest.fixture
def app_config(tmp_path):
    config_file = tmp_path / "app_config.yml"
    config_file.write_text(
        f'base_url: "{BASE_URL}/"\ndiscord_prefix: "!"\ndm_timezone: "UTC"\n',
        encoding="utf-8",
    )
    return AppConfig(config_file, environ={})


@pytest.fixture
def translator():
    return Translator()


@pytest.fixture
def embed_creator(translator):
    return NotificationEmbedCreator(translator, BASE_URL)


@pytest.fixture
def moderator():
    return FakeUser(MODERATOR_ID, "moderator")


@pytest.fixture
def case_user():
    return FakeUser(USER_ID, "offender")


@pytest.fixture
def mod_case():
    return ModCase(
        id=10,
        case_id=4,
        guild_id=GuildID(GUILD_ID),
        user_id=UserID(USER_ID),
        moderator_id=UserID(MODERATOR_ID),
        title="Spamming invite links",
        description="Posted the same invite in five channels.",
        punishment_type=PunishmentType.WARN,
        labels=["spam"],
    )


@pytest.fixture
def tomorrow():
    return datetime.now(timezone.utc) + timedelta(days=1)


@pytest.fixture
def discord_api(case_user):
    api = MagicMock()
    api.fetch_user_info = AsyncMock(return_value=case_user)
    api.fetch_guild_info = AsyncMock(return_value=FakeGuild(GUILD_ID))
    api.send_dm_message = AsyncMock(return_value=True)
    api.execute_webhook = AsyncMock(return_value=True)
    return api


def make_guild_config(public=None, internal=None, language="en") -> GuildConfig:
    return GuildConfig(
        guild_id=GuildID(GUILD_ID),
        mod_public_notification_webhook=public,
        mod_internal_notification_webhook=internal,
        preferred_language=language,
    )


@pytest.fixture
def make_announcer(app_config, discord_api, embed_creator, translator):
    def _make(guild_config: GuildConfig):
        guild_configs = FakeGuildConfigs(guild_config)
        announcer = DiscordAnnouncer(
            config=app_config,
            discord_api=discord_api,
            guild_configs=guild_configs,
            embed_creator=embed_creator,
            translator=translator,
        )
        return announcer, guild_configs

    return _make
