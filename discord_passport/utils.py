# SPDX-License-Identifier: MIT

from __future__ import annotations

import datetime
from typing import Any, Iterable, Optional
from urllib.parse import urlencode

from .errors import SnowflakeRangeError, SnowflakeTypeError

__all__ = (
    "AUTHORIZE_URL",
    "SNOWFLAKE_LENGTH",
    "utcnow",
    "join_scope",
    "is_snowflake",
    "validate_snowflake",
    "oauth_url",
)

AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
SNOWFLAKE_LENGTH = 18


def utcnow() -> datetime.datetime:
    """A helper function to return an aware UTC datetime representing the current time."""
    return datetime.datetime.now(datetime.timezone.utc)


def join_scope(scope: Iterable[str]) -> str:
    return " ".join(scope)


def _is_digits(value: str) -> bool:
    # str.isdigit() also accepts superscripts and other unicode digits
    return value.isascii() and value.isdigit()


def is_snowflake(value: Any) -> bool:
    """Whether ``value`` is a string of exactly 18 decimal digits."""
    return isinstance(value, str) and _is_digits(value) and len(value) == SNOWFLAKE_LENGTH


def validate_snowflake(value: Any, param: str = "guild") -> str:
    """Checks that ``value`` looks like a snowflake and returns it.

    Raises
    -------
    SnowflakeTypeError
        ``value`` is not a string made of decimal digits.
    SnowflakeRangeError
        ``value`` is not 18 characters long.
    """
    if not isinstance(value, str) or not _is_digits(value):
        raise SnowflakeTypeError(param)
    if len(value) != SNOWFLAKE_LENGTH:
        raise SnowflakeRangeError(param)
    return value


def oauth_url(
    client_id: str,
    *,
    redirect_uri: str,
    scope: Iterable[str],
    state: Optional[str] = None,
    **kwargs: Any,
) -> str:
    """Gets the OAuth2 authorization URL the user should be sent to.

    Parameters
    -----------
    client_id: :class:`str`
        The client ID of the application.
    redirect_uri: :class:`str`
        Where Discord redirects the user with the ``code``.
    scope: Iterable[:class:`str`]
        The scopes to request.
    state: Optional[:class:`str`]
        The state to include in the auth request.
    **kwargs
        Additional query parameters to include, e.g. ``prompt='none'``.
    """
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": join_scope(scope),
    }

    if state:
        params["state"] = state

    params.update(kwargs)

    return f"{AUTHORIZE_URL}?{urlencode(params)}"
