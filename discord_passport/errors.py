"""
discord_passport.errors
~~~~~~~~~~~~~~~~~~~~~~~

Exceptions raised while walking a user through the OAuth2 flow.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import json
from typing import Any, Optional

__all__ = (
    "PassportException",
    "ConfigError",
    "RequestError",
    "HTTPException",
    "TokenExchangeError",
    "AuthorizationError",
    "PreconditionError",
    "MissingScope",
    "MissingParameter",
    "ValidationError",
    "SnowflakeTypeError",
    "SnowflakeRangeError",
    "GuildJoinError",
)

PREFIX = "DiscordPassportError: "


def _dump(payload: Any) -> str:
    try:
        return json.dumps(payload)
    except (TypeError, ValueError):
        return repr(payload)


class PassportException(Exception):
    """Base exception class for discord_passport.

    Every error raised by this library derives from this class.
    """

    def __init__(self, message: str) -> None:
        super().__init__(PREFIX + message)


class ConfigError(PassportException):
    """A required option was missing when building a passport.

    Attributes
    -----------
    field: :class:`str`
        The name of the missing option.
    """

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field: str = field
        super().__init__(message or f"Missing the {field} param.")


class RequestError(PassportException):
    """The request could not be sent or gave back no usable response."""


class HTTPException(RequestError):
    """Discord answered with a non-2xx status.

    Attributes
    -----------
    status: :class:`int`
        The HTTP status code.
    data: Any
        The parsed response body, ``None`` if it was empty.
    """

    def __init__(self, status: int, reason: str, data: Any) -> None:
        self.status: int = status
        self.data: Any = data
        message = f"{status} {reason}"
        if data is not None:
            message += f": {_dump(data)}"
        super().__init__(message)


class TokenExchangeError(PassportException):
    """The token endpoint replied without an ``access_token``.

    Attributes
    -----------
    payload: Any
        The raw response body.
    """

    def __init__(self, payload: Any) -> None:
        self.payload: Any = payload
        super().__init__(
            "Unable to fetch the token with given options. Make sure they are correct.\n"
            + _dump(payload)
        )


class AuthorizationError(PassportException):
    """A scoped profile request failed.

    Attributes
    -----------
    scope: :class:`str`
        The scope whose endpoint was being fetched.
    """

    def __init__(self, scope: str) -> None:
        self.scope: str = scope
        super().__init__(f"Authorization failed while fetching the {scope} scope.")


class PreconditionError(PassportException):
    """An operation was called before the passport was ready for it."""


class MissingScope(PreconditionError):
    """The passport was not granted the scope an operation needs.

    Attributes
    -----------
    scope: :class:`str`
        The required scope.
    """

    def __init__(self, scope: str, method: str) -> None:
        self.scope: str = scope
        super().__init__(f"The method {method} requires the {scope} scope.")


class MissingParameter(PreconditionError):
    """A required argument was not passed."""

    def __init__(self, param: str) -> None:
        self.param: str = param
        super().__init__(f"The {param} param is missing.")


class ValidationError(PassportException):
    """An argument failed validation."""


class SnowflakeTypeError(ValidationError, TypeError):
    def __init__(self, param: str) -> None:
        self.param: str = param
        super().__init__(f"The {param} param must be a string representation of a number.")


class SnowflakeRangeError(ValidationError, ValueError):
    def __init__(self, param: str) -> None:
        self.param: str = param
        super().__init__(f"The {param} param must be a valid, 18 digit snowflake.")


class GuildJoinError(PassportException):
    """Adding the user to a guild failed."""

    def __init__(self, guild: str) -> None:
        self.guild: str = guild
        super().__init__(
            "Could not add the user to the guild, make sure the client has "
            "CREATE_INSTANT_INVITE permissions."
        )
