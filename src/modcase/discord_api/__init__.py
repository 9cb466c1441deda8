from modcase.discord_api.api_cache import DiscordAPICache
from modcase.discord_api.discord_api import CacheBehavior, DiscordAPIInterface

__all__ = ["CacheBehavior", "DiscordAPICache", "DiscordAPIInterface"]
