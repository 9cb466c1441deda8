"""
Records announced by the dispatcher.

The case-management layer owns these objects; the announcer only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import List, Optional

from modcase.datatypes.discord_datatypes import GuildID, UserID


class PunishmentType(IntEnum):
    """Kind of punishment recorded in a mod case."""

    WARN = 0
    MUTE = 1
    KICK = 2
    BAN = 3

    @property
    def key(self) -> str:
        """Lower-case name used in message keys, e.g. ``"mute"``."""
        return self.name.lower()


class RestAction(Enum):
    """Why a notification fires."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"

    def __str__(self) -> str:
        return self.value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ModCase:
    """A recorded punishment against a user in a guild.

    Attributes:
        id: Global database id of the case.
        case_id: Per-guild sequential case number shown to users.
        guild_id: Guild the case belongs to.
        user_id: Punished user.
        moderator_id: Moderator who created the case.
        title: Short summary shown in notifications.
        description: Full reasoning.
        punishment_type: Warn, mute, kick or ban.
        punished_until: Expiry of a temporary punishment, None when permanent.
    """

    id: int
    case_id: int
    guild_id: GuildID
    user_id: UserID
    moderator_id: UserID
    title: str
    description: str = ""
    username: str = ""
    punishment_type: PunishmentType = PunishmentType.WARN
    punished_until: Optional[datetime] = None
    labels: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def is_temporary(self) -> bool:
        return self.punished_until is not None


@dataclass(slots=True)
class ModCaseComment:
    """A comment posted on a mod case."""

    id: int
    mod_case: ModCase
    user_id: UserID
    message: str
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class UserNote:
    """A staff note attached to a user of a guild."""

    id: int
    guild_id: GuildID
    user_id: UserID
    creator_id: UserID
    description: str
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class UserMapping:
    """A staff-recorded link between two accounts (e.g. an alt)."""

    id: int
    guild_id: GuildID
    user_a: UserID
    user_b: UserID
    creator_id: UserID
    reason: str = ""
    updated_at: datetime = field(default_factory=_utcnow)
