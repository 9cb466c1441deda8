"""Tests for the Discord REST wrapper and its cache."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from conftest import FakeUser, GUILD_ID, USER_ID
from modcase.datatypes.discord_datatypes import UserID
from modcase.discord_api import api_cache
from modcase.discord_api.api_cache import DiscordAPICache, guild_key, user_key
from modcase.discord_api.discord_api import CacheBehavior, DiscordAPIInterface
from modcase.errors import ResourceNotFoundError


def http_error(cls, status: int):
    response = MagicMock()
    response.status = status
    response.reason = "error"
    return cls(response, "error")


@pytest.fixture
def client():
    client = MagicMock()
    client.fetch_user = AsyncMock(return_value=FakeUser(USER_ID))
    client.fetch_guild = AsyncMock(return_value=MagicMock(id=GUILD_ID))
    client.login = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def api(client, session):
    return DiscordAPIInterface("token", DiscordAPICache(ttl_seconds=60), client=client, session=session)


class TestFetching:
    @pytest.mark.asyncio
    async def test_default_uses_cache_after_first_fetch(self, api, client):
        first = await api.fetch_user_info(UserID(USER_ID))
        second = await api.fetch_user_info(USER_ID, CacheBehavior.DEFAULT)

        assert first is second
        client.fetch_user.assert_awaited_once_with(USER_ID)

    @pytest.mark.asyncio
    async def test_ignore_cache_always_fetches(self, api, client):
        await api.fetch_user_info(USER_ID)
        await api.fetch_user_info(USER_ID, CacheBehavior.IGNORE_CACHE)

        assert client.fetch_user.await_count == 2

    @pytest.mark.asyncio
    async def test_only_cache_never_fetches(self, api, client):
        with pytest.raises(ResourceNotFoundError):
            await api.fetch_guild_info(GUILD_ID, CacheBehavior.ONLY_CACHE)
        client.fetch_guild.assert_not_awaited()

        await api.fetch_guild_info(GUILD_ID)
        guild = await api.fetch_guild_info(str(GUILD_ID), CacheBehavior.ONLY_CACHE)
        assert guild.id == GUILD_ID

    @pytest.mark.asyncio
    async def test_not_found_is_mapped(self, api, client):
        client.fetch_user = AsyncMock(side_effect=http_error(discord.NotFound, 404))

        with pytest.raises(ResourceNotFoundError):
            await api.fetch_user_info(USER_ID)

    @pytest.mark.asyncio
    async def test_other_http_errors_propagate(self, api, client):
        client.fetch_guild = AsyncMock(side_effect=http_error(discord.HTTPException, 500))

        with pytest.raises(discord.HTTPException):
            await api.fetch_guild_info(GUILD_ID)


class TestSending:
    @pytest.mark.asyncio
    async def test_send_dm(self, api, client):
        user = MagicMock()
        user.send = AsyncMock()
        client.fetch_user = AsyncMock(return_value=user)

        assert await api.send_dm_message(USER_ID, "hello") is True
        user.send.assert_awaited_once_with("hello")

    @pytest.mark.asyncio
    async def test_closed_dms_return_false(self, api, client):
        user = MagicMock()
        user.send = AsyncMock(side_effect=http_error(discord.Forbidden, 403))
        client.fetch_user = AsyncMock(return_value=user)

        assert await api.send_dm_message(USER_ID, "hello") is False

    @pytest.mark.asyncio
    async def test_execute_webhook(self, api, session, monkeypatch):
        webhook = MagicMock()
        webhook.send = AsyncMock()
        from_url = MagicMock(return_value=webhook)
        monkeypatch.setattr(discord.Webhook, "from_url", from_url)
        embed = discord.Embed(title="t")

        assert await api.execute_webhook("https://discord.com/api/webhooks/1/x", embed, "<@1>") is True

        from_url.assert_called_once_with("https://discord.com/api/webhooks/1/x", session=session)
        kwargs = webhook.send.await_args.kwargs
        assert kwargs["content"] == "<@1>"
        assert kwargs["embed"] is embed
        assert kwargs["allowed_mentions"].everyone is False

    @pytest.mark.asyncio
    async def test_webhook_requires_session(self, client):
        api = DiscordAPIInterface("token", client=client)

        with pytest.raises(RuntimeError):
            await api.execute_webhook("https://discord.com/api/webhooks/1/x", discord.Embed())


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_login_requires_token(self, client):
        api = DiscordAPIInterface(None, client=client)

        with pytest.raises(RuntimeError):
            await api.login()
        client.login.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_injected_session_is_not_closed(self, api, client, session):
        session.close = AsyncMock()

        await api.close()

        session.close.assert_not_awaited()
        client.close.assert_awaited_once()


class TestCache:
    def test_expired_entries_are_dropped(self, monkeypatch):
        clock = iter([0.0, 100.0])
        monkeypatch.setattr(api_cache, "time", SimpleNamespace(monotonic=lambda: next(clock)))
        cache = DiscordAPICache(ttl_seconds=10)

        cache.set(user_key(1), "user")

        assert cache.get(user_key(1)) is None
        assert len(cache) == 0

    def test_invalidate_by_pattern(self):
        cache = DiscordAPICache()
        cache.set(user_key(1), "a")
        cache.set(user_key(2), "b")
        cache.set(guild_key(1), "c")

        assert cache.invalidate("user:") == 2
        assert cache.get(guild_key(1)) == "c"
        assert cache.invalidate() == 1

    def test_storing_sweeps_expired_entries(self, monkeypatch):
        clock = SimpleNamespace(now=0.0)
        monkeypatch.setattr(api_cache, "time", SimpleNamespace(monotonic=lambda: clock.now))
        cache = DiscordAPICache(ttl_seconds=10)
        for user_id in range(1000):
            cache.set(user_key(user_id), "user")

        clock.now = 20.0
        for guild_id in range(10):
            cache.set(guild_key(guild_id), "guild")

        assert len(cache) == 10
        assert cache.get(guild_key(0)) == "guild"
