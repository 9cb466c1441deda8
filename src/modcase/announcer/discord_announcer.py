"""
Announces moderation events to users and staff.

A case action can produce up to three deliveries, attempted in this order:

1. a direct message to the punished user (never for deleted cases),
2. the guild's public webhook (only when requested),
3. the guild's internal staff webhook (whenever configured).

Comments, files, user notes and user mappings only ever go to the internal
webhook. Errors raised by a delivery are not caught here: the caller sees
them and the remaining deliveries of that call are skipped.
"""

from __future__ import annotations

from typing import Optional, Protocol

import discord

from modcase.configuration.app_configuration import AppConfig
from modcase.datatypes.case_datatypes import (
    ModCase,
    ModCaseComment,
    PunishmentType,
    RestAction,
    UserMapping,
    UserNote,
)
from modcase.datatypes.discord_datatypes import GuildID
from modcase.datatypes.guild_config import GuildConfig
from modcase.discord_api.discord_api import CacheBehavior, DiscordAPIInterface
from modcase.announcer.notification_embed_creator import AnyUser, NotificationEmbedCreator
from modcase.localization.translator import Translator
from modcase.util.logger import get_logger

logger = get_logger("discord_announcer")


class GuildConfigSource(Protocol):
    async def get_guild_config(self, guild_id: GuildID) -> GuildConfig: ...


def select_dm_template(punishment_type: PunishmentType, is_temporary: bool) -> str:
    """Return the message key of the DM sent for a punishment."""
    if punishment_type == PunishmentType.MUTE:
        return "notification_modcase_dm_mute_temp" if is_temporary else "notification_modcase_dm_mute_perm"
    if punishment_type == PunishmentType.KICK:
        return "notification_modcase_dm_kick"
    if punishment_type == PunishmentType.BAN:
        return "notification_modcase_dm_ban_temp" if is_temporary else "notification_modcase_dm_ban_perm"
    return "notification_modcase_dm_warn"


class DiscordAnnouncer:
    """Turns moderation events into DMs and webhook messages."""

    def __init__(
        self,
        config: AppConfig,
        discord_api: DiscordAPIInterface,
        guild_configs: GuildConfigSource,
        embed_creator: NotificationEmbedCreator,
        translator: Translator,
    ) -> None:
        self.config = config
        self.discord_api = discord_api
        self.guild_configs = guild_configs
        self.embed_creator = embed_creator
        self.translator = translator

    async def _send_internal(self, guild_config: GuildConfig, embed: discord.Embed, content: Optional[str] = None) -> None:
        url = guild_config.mod_internal_notification_webhook
        logger.info("[ANNOUNCER] Sending internal webhook to %s.", url)
        await self.discord_api.execute_webhook(url, embed, content)
        logger.info("[ANNOUNCER] Sent internal webhook.")

    async def announce_mod_case(
        self,
        mod_case: ModCase,
        action: RestAction,
        actor: AnyUser,
        announce_public: bool,
        announce_dm: bool,
    ) -> None:
        logger.info("[ANNOUNCER] Announcing mod case %s in guild %s.", mod_case.id, mod_case.guild_id)

        case_user = await self.discord_api.fetch_user_info(mod_case.user_id, CacheBehavior.DEFAULT)
        guild_config = await self.guild_configs.get_guild_config(mod_case.guild_id)
        language = guild_config.preferred_language

        if announce_dm and action != RestAction.DELETED:
            logger.info("[ANNOUNCER] Sending dm notification.")

            guild = await self.discord_api.fetch_guild_info(mod_case.guild_id, CacheBehavior.DEFAULT)
            template_key = select_dm_template(mod_case.punishment_type, mod_case.is_temporary)
            message = self.translator.render_modcase_dm(
                template_key,
                mod_case,
                guild,
                self.config.discord_prefix,
                self.config.base_url,
                tz_name=self.config.dm_timezone if mod_case.is_temporary else None,
                language=language,
            )
            sent = await self.discord_api.send_dm_message(mod_case.user_id, message)
            if sent:
                logger.info("[ANNOUNCER] Sent dm notification.")
            else:
                logger.info("[ANNOUNCER] Dm notification was not delivered.")

        if announce_public and guild_config.has_public_webhook:
            url = guild_config.mod_public_notification_webhook
            logger.info("[ANNOUNCER] Sending public webhook to %s.", url)

            embed = self.embed_creator.create_modcase_embed(mod_case, action, actor, case_user, False, language)
            await self.discord_api.execute_webhook(url, embed, mod_case.user_id.mention)
            logger.info("[ANNOUNCER] Sent public webhook.")

        if guild_config.has_internal_webhook:
            embed = self.embed_creator.create_modcase_embed(mod_case, action, actor, case_user, True, language)
            await self._send_internal(guild_config, embed, mod_case.user_id.mention)

    async def announce_comment(self, comment: ModCaseComment, actor: AnyUser, action: RestAction) -> None:
        mod_case = comment.mod_case
        logger.info(
            "[ANNOUNCER] Announcing comment %s in case %s in guild %s.",
            comment.id, mod_case.case_id, mod_case.guild_id,
        )

        guild_config = await self.guild_configs.get_guild_config(mod_case.guild_id)
        if not guild_config.has_internal_webhook:
            return

        comment_user = await self.discord_api.fetch_user_info(comment.user_id, CacheBehavior.DEFAULT)
        embed = self.embed_creator.create_comment_embed(
            comment, action, actor, comment_user, guild_config.preferred_language
        )
        await self._send_internal(guild_config, embed)

    async def announce_file(self, filename: str, mod_case: ModCase, actor: AnyUser, action: RestAction) -> None:
        logger.info(
            "[ANNOUNCER] Announcing file %s in case %s in guild %s.",
            filename, mod_case.case_id, mod_case.guild_id,
        )

        guild_config = await self.guild_configs.get_guild_config(mod_case.guild_id)
        if not guild_config.has_internal_webhook:
            return

        embed = self.embed_creator.create_file_embed(filename, mod_case, action, actor, guild_config.preferred_language)
        await self._send_internal(guild_config, embed)

    async def announce_user_note(self, user_note: UserNote, actor: AnyUser, action: RestAction) -> None:
        logger.info("[ANNOUNCER] Announcing user note %s in guild %s.", user_note.id, user_note.guild_id)

        guild_config = await self.guild_configs.get_guild_config(user_note.guild_id)
        if not guild_config.has_internal_webhook:
            return

        note_user = await self.discord_api.fetch_user_info(user_note.user_id, CacheBehavior.DEFAULT)
        embed = self.embed_creator.create_usernote_embed(
            user_note, action, actor, note_user, guild_config.preferred_language
        )
        await self._send_internal(guild_config, embed)

    async def announce_user_mapping(self, user_mapping: UserMapping, actor: AnyUser, action: RestAction) -> None:
        logger.info("[ANNOUNCER] Announcing user mapping %s in guild %s.", user_mapping.id, user_mapping.guild_id)

        guild_config = await self.guild_configs.get_guild_config(user_mapping.guild_id)
        if not guild_config.has_internal_webhook:
            return

        embed = self.embed_creator.create_usermap_embed(user_mapping, action, actor, guild_config.preferred_language)
        await self._send_internal(guild_config, embed)
