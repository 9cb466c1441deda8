"""
Error codes reported over the API boundary and the exceptions carrying them.

``APIError`` values are part of the public contract with the web UI: new codes
are appended, existing ones are never renumbered.
"""

from enum import IntEnum


class APIError(IntEnum):
    UNKNOWN = 0
    INVALID_DISCORD_USER = 1
    PROTECTED_MOD_CASE_SUSPECT = 2
    PROTECTED_MOD_CASE_SUSPECT_IS_BOT = 3
    PROTECTED_MOD_CASE_SUSPECT_IS_SITE_ADMIN = 4
    PROTECTED_MOD_CASE_SUSPECT_IS_TEAM = 5
    RESOURCE_NOT_FOUND = 6
    INVALID_IDENTITY = 7
    GUILD_UNREGISTERED = 8
    UNAUTHORIZED = 9
    GUILD_UNDEFINED_MUTED_ROLES = 10
    MOD_CASE_IS_MARKED_TO_BE_DELETED = 11
    MOD_CASE_IS_NOT_MARKED_TO_BE_DELETED = 12
    GUILD_ALREADY_REGISTERED = 13
    NOT_ALLOWED_IN_DEMO_MODE = 14
    ROLE_NOT_FOUND = 15
    TOKEN_CANNOT_MANAGE_THIS_RESOURCE = 16
    TOKEN_ALREADY_REGISTERED = 17
    CANNOT_BE_SAME_USER = 18
    RESOURCE_ALREADY_EXISTS = 19


class ModCaseError(Exception):
    """Base class for errors that map onto an :class:`APIError` code."""

    code: APIError = APIError.UNKNOWN

    def __init__(self, message: str = "", code: APIError | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        if code is not None:
            self.code = code


class ResourceNotFoundError(ModCaseError):
    code = APIError.RESOURCE_NOT_FOUND


class GuildUnregisteredError(ModCaseError):
    code = APIError.GUILD_UNREGISTERED


class UnauthorizedError(ModCaseError):
    code = APIError.UNAUTHORIZED


class InvalidDiscordUserError(ModCaseError):
    code = APIError.INVALID_DISCORD_USER
