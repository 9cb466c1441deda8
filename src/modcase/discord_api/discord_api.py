"""
REST access to Discord for the announcer.

The client logs in with the bot token but never opens a gateway connection:
users and guilds are fetched over HTTP, DMs go through the bot's DM channel and
webhooks are executed through a dedicated aiohttp session.
"""

from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar, Union

import aiohttp
import discord

from modcase.datatypes.discord_datatypes import GuildID, UserID
from modcase.discord_api.api_cache import DiscordAPICache, guild_key, user_key
from modcase.errors import ResourceNotFoundError
from modcase.util.logger import get_logger

logger = get_logger("discord_api")

T = TypeVar("T")

UserLike = Union[UserID, int, str]
GuildLike = Union[GuildID, int, str]


class CacheBehavior(Enum):
    """How a fetch consults the local cache."""

    DEFAULT = "default"            # cache first, API on miss
    ONLY_CACHE = "only_cache"      # never call the API
    IGNORE_CACHE = "ignore_cache"  # always call the API, refresh the cache


class DiscordAPIInterface:
    """Thin wrapper over py-cord's HTTP layer with a TTL cache."""

    def __init__(
        self,
        token: str | None,
        cache: DiscordAPICache | None = None,
        client: discord.Client | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._token = token
        self._cache = cache or DiscordAPICache()
        self._client = client or discord.Client(intents=discord.Intents.none())
        self._session = session
        self._owns_session = session is None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def login(self) -> None:
        """Authenticate the REST client and open the webhook session."""
        if not self._token:
            raise RuntimeError("DiscordAPIInterface: no bot token configured")
        await self._client.login(self._token)
        if self._session is None:
            self._session = aiohttp.ClientSession()
        logger.info("[DISCORD API] Logged in as %s", self._client.user)

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
        await self._client.close()
        logger.info("[DISCORD API] Closed")

    @property
    def cache(self) -> DiscordAPICache:
        return self._cache

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    async def _cached_fetch(
        self,
        key: str,
        cache_behavior: CacheBehavior,
        fetch: Callable[[], Awaitable[T]],
    ) -> T:
        if cache_behavior is not CacheBehavior.IGNORE_CACHE:
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            if cache_behavior is CacheBehavior.ONLY_CACHE:
                raise ResourceNotFoundError(f"{key} is not cached")

        try:
            result = await fetch()
        except discord.NotFound as exc:
            raise ResourceNotFoundError(f"{key} not found on Discord") from exc

        self._cache.set(key, result)
        return result

    async def fetch_user_info(
        self,
        user_id: UserLike,
        cache_behavior: CacheBehavior = CacheBehavior.DEFAULT,
    ) -> discord.User:
        """
        Fetch a user profile.

        Raises:
            ResourceNotFoundError: If Discord does not know the user, or it is
                not cached under ``CacheBehavior.ONLY_CACHE``.
        """
        uid = UserID(user_id).to_int()
        return await self._cached_fetch(user_key(uid), cache_behavior, lambda: self._client.fetch_user(uid))

    async def fetch_guild_info(
        self,
        guild_id: GuildLike,
        cache_behavior: CacheBehavior = CacheBehavior.DEFAULT,
    ) -> discord.Guild:
        """Fetch a guild; same error contract as :meth:`fetch_user_info`."""
        gid = GuildID(guild_id).to_int()
        return await self._cached_fetch(guild_key(gid), cache_behavior, lambda: self._client.fetch_guild(gid))

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send_dm_message(self, user_id: UserLike, content: str) -> bool:
        """
        Send ``content`` to the user's DMs.

        Returns:
            bool: False when the user does not accept DMs from the bot.
        """
        user = await self.fetch_user_info(user_id)
        try:
            await user.send(content)
        except discord.Forbidden:
            logger.warning("[DISCORD API] User %s does not accept direct messages", user_id)
            return False
        return True

    async def execute_webhook(
        self,
        url: str,
        embed: discord.Embed,
        content: Optional[str] = None,
    ) -> bool:
        """Post ``embed`` (and optional ``content``) to a webhook URL."""
        if self._session is None:
            raise RuntimeError("DiscordAPIInterface: login() must be awaited before executing webhooks")

        webhook = discord.Webhook.from_url(url, session=self._session)
        await webhook.send(
            content=content,
            embed=embed,
            allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
        )
        return True
