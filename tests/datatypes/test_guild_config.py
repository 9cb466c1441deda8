import pytest

from modcase.datatypes.discord_datatypes import GuildID
from modcase.datatypes.guild_config import GuildConfig


@pytest.mark.parametrize("url, expected", [(None, False), ("", False), ("  ", False), ("https://x", True)])
def test_webhook_flags(url, expected):
    config = GuildConfig(
        guild_id=GuildID(1),
        mod_public_notification_webhook=url,
        mod_internal_notification_webhook=url,
    )
    assert config.has_public_webhook is expected
    assert config.has_internal_webhook is expected


def test_defaults():
    config = GuildConfig(guild_id=GuildID(1))
    assert config.preferred_language == "en"
    assert not config.has_public_webhook
