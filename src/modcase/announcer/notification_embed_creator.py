"""
Embed builders for moderation notifications.

Every builder returns a ready-to-send :class:`discord.Embed`. Internal embeds
go to the staff audit channel and name the acting moderator; the public case
embed never does.
"""

from __future__ import annotations

import datetime
from typing import Optional, Union

import discord

from modcase.datatypes.case_datatypes import (
    ModCase,
    ModCaseComment,
    PunishmentType,
    RestAction,
    UserMapping,
    UserNote,
)
from modcase.datatypes.discord_datatypes import UserID
from modcase.localization.translator import Translator, case_url, format_expiry
from modcase.util.logger import get_logger

logger = get_logger("notification_embed_creator")

AnyUser = Union[discord.User, discord.Member, discord.ClientUser]

ACTION_COLORS = {
    RestAction.CREATED: discord.Color.green(),
    RestAction.UPDATED: discord.Color.orange(),
    RestAction.DELETED: discord.Color.red(),
}

# Discord rejects field values above 1024 characters
FIELD_LIMIT = 1024


def _clip(text: str, limit: int = FIELD_LIMIT) -> str:
    text = text or "-"
    return text if len(text) <= limit else text[: limit - 3] + "..."


def describe_user(user: Optional[AnyUser], fallback_id: Optional[UserID] = None) -> str:
    """``@mention (`id`)`` for a fetched user, ``<@id> (`id`)`` when only the id is known."""
    if user is not None:
        return f"{user.mention} (`{user.id}`)"
    if fallback_id is not None:
        return f"{fallback_id.mention} (`{fallback_id}`)"
    return "-"


class NotificationEmbedCreator:
    """Builds localized embeds for the five announced record kinds."""

    def __init__(self, translator: Translator, base_url: str) -> None:
        self.translator = translator
        self.base_url = base_url.rstrip("/")

    def _base_embed(self, title: str, action: RestAction, url: Optional[str] = None) -> discord.Embed:
        embed = discord.Embed(
            title=title,
            color=ACTION_COLORS.get(action, discord.Color.light_grey()),
            timestamp=datetime.datetime.now(datetime.timezone.utc),
        )
        if url:
            embed.url = url
        return embed

    def _t(self, key: str, language: Optional[str], **values) -> str:
        return self.translator.t(key, language, **values)

    def create_modcase_embed(
        self,
        mod_case: ModCase,
        action: RestAction,
        actor: AnyUser,
        case_user: Optional[AnyUser],
        is_internal: bool,
        language: Optional[str] = None,
    ) -> discord.Embed:
        embed = self._base_embed(
            self._t(f"embed_modcase_title_{action.value}", language, case_id=mod_case.case_id),
            action,
            case_url(self.base_url, mod_case),
        )
        embed.description = _clip(mod_case.title, 4096)

        embed.add_field(name=self._t("field_user", language), value=describe_user(case_user, mod_case.user_id), inline=True)
        embed.add_field(
            name=self._t("field_punishment", language),
            value=self._t(f"punishment_{mod_case.punishment_type.key}", language),
            inline=True,
        )
        if mod_case.punishment_type in (PunishmentType.MUTE, PunishmentType.BAN):
            until = (
                format_expiry(mod_case.punished_until, "UTC")
                if mod_case.punished_until is not None
                else self._t("permanent", language)
            )
            embed.add_field(name=self._t("field_punished_until", language), value=until, inline=True)

        if mod_case.description:
            embed.add_field(name=self._t("field_description", language), value=_clip(mod_case.description), inline=False)

        if is_internal:
            embed.add_field(name=self._t("field_moderator", language), value=describe_user(actor), inline=True)
            if mod_case.labels:
                embed.add_field(
                    name=self._t("field_labels", language),
                    value=_clip(", ".join(f"`{label}`" for label in mod_case.labels)),
                    inline=True,
                )

        embed.set_footer(text=self._t("footer_case", language, case_id=mod_case.case_id))
        return embed

    def create_comment_embed(
        self,
        comment: ModCaseComment,
        action: RestAction,
        actor: AnyUser,
        comment_user: Optional[AnyUser] = None,
        language: Optional[str] = None,
    ) -> discord.Embed:
        mod_case = comment.mod_case
        embed = self._base_embed(
            self._t(f"embed_comment_title_{action.value}", language, case_id=mod_case.case_id),
            action,
            case_url(self.base_url, mod_case),
        )
        embed.add_field(name=self._t("field_comment", language), value=_clip(comment.message), inline=False)
        embed.add_field(name=self._t("field_user", language), value=describe_user(comment_user, comment.user_id), inline=True)
        embed.add_field(name=self._t("field_moderator", language), value=describe_user(actor), inline=True)
        embed.set_footer(text=self._t("footer_case", language, case_id=mod_case.case_id))
        return embed

    def create_file_embed(
        self,
        filename: str,
        mod_case: ModCase,
        action: RestAction,
        actor: AnyUser,
        language: Optional[str] = None,
    ) -> discord.Embed:
        embed = self._base_embed(
            self._t(f"embed_file_title_{action.value}", language, case_id=mod_case.case_id),
            action,
            case_url(self.base_url, mod_case),
        )
        embed.add_field(name=self._t("field_file", language), value=_clip(f"`{filename}`"), inline=False)
        embed.add_field(name=self._t("field_case", language), value=_clip(f"#{mod_case.case_id} {mod_case.title}"), inline=False)
        embed.add_field(name=self._t("field_moderator", language), value=describe_user(actor), inline=True)
        embed.set_footer(text=self._t("footer_case", language, case_id=mod_case.case_id))
        return embed

    def create_usernote_embed(
        self,
        user_note: UserNote,
        action: RestAction,
        actor: AnyUser,
        note_user: Optional[AnyUser],
        language: Optional[str] = None,
    ) -> discord.Embed:
        embed = self._base_embed(
            self._t(f"embed_usernote_title_{action.value}", language),
            action,
            f"{self.base_url}/guilds/{user_note.guild_id}/scanning/{user_note.user_id}",
        )
        embed.add_field(name=self._t("field_user", language), value=describe_user(note_user, user_note.user_id), inline=True)
        embed.add_field(name=self._t("field_moderator", language), value=describe_user(actor), inline=True)
        embed.add_field(name=self._t("field_note", language), value=_clip(user_note.description), inline=False)
        return embed

    def create_usermap_embed(
        self,
        user_mapping: UserMapping,
        action: RestAction,
        actor: AnyUser,
        language: Optional[str] = None,
    ) -> discord.Embed:
        embed = self._base_embed(
            self._t(f"embed_usermap_title_{action.value}", language),
            action,
            f"{self.base_url}/guilds/{user_mapping.guild_id}/scanning/{user_mapping.user_a}",
        )
        embed.add_field(
            name=self._t("field_users", language),
            value=f"{describe_user(None, user_mapping.user_a)}\n{describe_user(None, user_mapping.user_b)}",
            inline=False,
        )
        embed.add_field(name=self._t("field_reason", language), value=_clip(user_mapping.reason), inline=False)
        embed.add_field(name=self._t("field_moderator", language), value=describe_user(actor), inline=True)
        return embed
