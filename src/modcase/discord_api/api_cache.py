"""
TTL cache for objects fetched from the Discord REST API.

Users and guilds rarely change between two notifications of the same case, so
they are reused for ``ttl_seconds`` before being fetched again.
"""

from typing import Dict, Tuple, Any, Optional
import time

from modcase.util.logger import get_logger

logger = get_logger("discord_api_cache")


def user_key(user_id: int) -> str:
    return f"user:{user_id}"


def guild_key(guild_id: int) -> str:
    return f"guild:{guild_id}"


class DiscordAPICache:
    """
    TTL-based cache keyed by ``user:<id>`` / ``guild:<id>``.

    Entries expire ``ttl_seconds`` after they were stored and are dropped on
    lookup or when a new entry is stored.
    """

    def __init__(self, ttl_seconds: float = 300):
        self._cache: Dict[str, Tuple[float, Any]] = {}
        self._ttl_seconds = ttl_seconds

    def get(self, cache_key: str) -> Optional[Any]:
        """Return the cached object, or None if it expired or was never stored."""
        if cache_key in self._cache:
            timestamp, result = self._cache[cache_key]
            if time.monotonic() - timestamp < self._ttl_seconds:
                logger.debug("[API CACHE] Hit for key: %s", cache_key)
                return result
            del self._cache[cache_key]
            logger.debug("[API CACHE] Expired key: %s", cache_key)
        return None

    def set(self, cache_key: str, result: Any) -> None:
        now = time.monotonic()
        self._purge_expired(now)
        self._cache[cache_key] = (now, result)
        logger.debug("[API CACHE] Set key: %s", cache_key)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (timestamp, _) in self._cache.items() if now - timestamp >= self._ttl_seconds]
        for key in expired:
            del self._cache[key]
        if expired:
            logger.debug("[API CACHE] Purged %d expired entries", len(expired))

    def invalidate(self, pattern: Optional[str] = None) -> int:
        """
        Drop entries whose key contains ``pattern``; everything when None.

        Returns:
            Number of entries removed
        """
        if pattern is None:
            count = len(self._cache)
            self._cache.clear()
            logger.debug("[API CACHE] Cleared all %d entries", count)
            return count

        keys_to_delete = [k for k in self._cache if pattern in k]
        for key in keys_to_delete:
            del self._cache[key]
        logger.debug("[API CACHE] Cleared %d entries matching '%s'", len(keys_to_delete), pattern)
        return len(keys_to_delete)

    def __len__(self) -> int:
        return len(self._cache)
