"""
Type-safe wrappers for Discord snowflake identifiers.

Snowflakes are 64-bit integers that the web UI and the database hand around as
strings. The wrappers keep the string form internally and convert with
``to_int()`` right before a Discord API call.
"""

from __future__ import annotations

from typing import Union

import discord


class Snowflake:
    """
    Base wrapper for a Discord snowflake ID.

    Example:
        >>> uid = UserID(123456789012345678)
        >>> uid.to_int()
        123456789012345678
        >>> str(uid)
        '123456789012345678'
        >>> uid.mention
        '<@123456789012345678>'
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[str, int, "Snowflake"]) -> None:
        """
        Args:
            value: The snowflake as a string, int, or another wrapper of the same kind.

        Raises:
            ValueError: If the value cannot be converted to a valid snowflake.
        """
        if isinstance(value, type(self)):
            self._value = value._value
        elif isinstance(value, bool):
            raise ValueError(f"Cannot create {type(self).__name__} from bool: {value}")
        elif isinstance(value, (int, str)):
            number = int(value.strip()) if isinstance(value, str) else value
            if number < 0:
                raise ValueError(f"Snowflake must be non-negative, got {value}")
            self._value = str(number)
        else:
            raise ValueError(f"Cannot create {type(self).__name__} from {type(value).__name__}: {value}")

    @classmethod
    def from_int(cls, value: int):
        return cls(value)

    def to_int(self) -> int:
        """Convert to an integer for Discord API calls."""
        return int(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, type(self)):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))


class UserID(Snowflake):
    """Snowflake of a Discord user."""

    __slots__ = ()

    @classmethod
    def from_user(cls, user: Union[discord.Member, discord.User]) -> "UserID":
        return cls(user.id)

    @property
    def mention(self) -> str:
        """Discord mention markup, used as webhook content to ping the user."""
        return f"<@{self._value}>"


class GuildID(Snowflake):
    """Snowflake of a Discord guild."""

    __slots__ = ()
