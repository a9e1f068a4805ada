# SPDX-License-Identifier: MIT

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from .types.oauth2 import Token
from . import utils

__all__ = (
    "PassportToken",
)


class PassportToken:
    """An immutable snapshot of one token response.

    Returned by :meth:`Passport.open` and :meth:`Passport.refresh`; the
    passport keeps the latest one as :attr:`Passport.current_token`.
    """

    __slots__ = (
        "_token_data",
        "_access_token",
        "_token_type",
        "_refresh_token",
        "_expires_in",
        "_expires_at",
    )

    def __init__(self, token_data: Token) -> None:
        self._token_data: Token = token_data
        self._access_token: str = token_data["access_token"]
        self._token_type: str = token_data.get("token_type") or "Bearer"
        self._refresh_token: Optional[str] = token_data.get("refresh_token")
        self._expires_in: Optional[int] = token_data.get("expires_in")
        self._expires_at: Optional[datetime] = None

        if self._expires_in is not None:
            self._expires_at = utils.utcnow() + timedelta(seconds=self._expires_in)

    def __repr__(self) -> str:
        return f"<PassportToken token_type={self._token_type!r} expires_at={self._expires_at!r}>"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PassportToken) and other._token_data == self._token_data

    def __hash__(self) -> int:
        return hash(self._access_token)

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def token_type(self) -> str:
        return self._token_type

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    @property
    def expires_in(self) -> Optional[int]:
        """The lifetime of the token in seconds, as reported by Discord."""
        return self._expires_in

    @property
    def expires_at(self) -> Optional[datetime]:
        return self._expires_at

    @property
    def scope(self) -> List[str]:
        """The scopes Discord actually granted."""
        return self._token_data.get("scope", "").split()

    @property
    def expired(self) -> bool:
        if self._expires_at is None:
            return False
        return utils.utcnow() >= self._expires_at

    def get_auth_header(self) -> Dict[str, str]:
        return {"Authorization": f"{self.token_type} {self.access_token}"}

    def to_dict(self) -> Token:
        return dict(self._token_data)  # type: ignore
