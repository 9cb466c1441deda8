"""
Moderation event announcements.

- **discord_announcer.py**: :class:`DiscordAnnouncer`, which decides which
  channels an event goes to (DM, public webhook, internal webhook) and sends it.
- **notification_embed_creator.py**: builds the embeds posted to webhooks.
"""

from modcase.announcer.discord_announcer import DiscordAnnouncer, select_dm_template
from modcase.announcer.notification_embed_creator import NotificationEmbedCreator

__all__ = ["DiscordAnnouncer", "NotificationEmbedCreator", "select_dm_template"]
