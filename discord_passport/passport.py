"""
discord_passport.passport
~~~~~~~~~~~~~~~~~~~~~~~~~

One OAuth2 Authorization Code session for one Discord user.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from .config import PassportConfig
from .errors import (
    AuthorizationError,
    ConfigError,
    GuildJoinError,
    HTTPException,
    MissingParameter,
    MissingScope,
    PreconditionError,
    RequestError,
    TokenExchangeError,
)
from .http import HTTPClient, Route
from .token import PassportToken
from .types.oauth2 import OAuth2Scope
from . import utils

if TYPE_CHECKING:
    from typing_extensions import Self

    from .types.oauth2 import Connection, Guild, GuildJoinPayload, GuildMember, User
    from .types.snowflake import SnowflakeList

__all__ = (
    'Passport',
)

_log = logging.getLogger(__name__)

# identify, then guilds, then connections
PROFILE_ROUTES = (
    (OAuth2Scope.IDENTIFY, 'user', '/users/@me'),
    (OAuth2Scope.GUILDS, 'guilds', '/users/@me/guilds'),
    (OAuth2Scope.CONNECTIONS, 'connections', '/users/@me/connections'),
)


class Passport:
    """Represents one OAuth2 flow for one user.

    Build one with the ``code`` Discord handed to your redirect URI, then
    :meth:`open` it.

    .. code-block:: python3

        async with Passport(code=code, client_id=..., client_secret=...,
                            redirect_uri=..., scope=['identify', 'guilds.join']) as passport:
            await passport.open()
            await passport.join_guild('123456789012345678')

    Parameters
    -----------
    code: :class:`str`
        The code returned from the OAuth2 flow.
    client_id: :class:`str`
        The client ID of the application.
    client_secret: :class:`str`
        The client secret of the application.
    redirect_uri: :class:`str`
        The redirect URI used in the authorization request.
    scope: Sequence[:class:`str`]
        The scopes requested in the authorization URL.
    state: Optional[:class:`str`]
        The state to pass through the flow.
    bot_token: Optional[:class:`str`]
        A bot token of the same application. Discord requires it to add
        members to a guild.
    http: Optional[:class:`HTTPClient`]
        The HTTP client to send requests with. One is created if omitted;
        a client passed in here is left open by :meth:`close`.

    Attributes
    -----------
    user: Optional[:class:`dict`]
        The user, requires the ``identify`` scope.
    guilds: Optional[List[:class:`dict`]]
        The user's guilds with limited information, requires the ``guilds`` scope.
    connections: Optional[List[:class:`dict`]]
        The user's connections, requires the ``connections`` scope.
    """

    def __init__(
        self,
        *,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: Sequence[str],
        state: Optional[str] = None,
        bot_token: Optional[str] = None,
        http: Optional[HTTPClient] = None,
    ) -> None:
        for name, value in (
            ('code', code),
            ('client_id', client_id),
            ('client_secret', client_secret),
            ('redirect_uri', redirect_uri),
            ('scope', scope),
        ):
            if not value:
                raise ConfigError(name)

        if isinstance(scope, str):
            raise ConfigError('scope', 'The scope param must be a sequence of scopes, not a string.')

        self._code: str = code
        self.state: Optional[str] = state
        self.client_id: str = client_id
        self.client_secret: str = client_secret
        self.redirect_uri: str = redirect_uri
        self.scope: Sequence[str] = scope
        self.bot_token: Optional[str] = bot_token
        self._owns_http: bool = http is None
        self.http: HTTPClient = http if http is not None else HTTPClient()

        self._token: Optional[PassportToken] = None
        self.user: Optional[User] = None
        self.guilds: Optional[List[Guild]] = None
        self.connections: Optional[List[Connection]] = None

    @classmethod
    def from_env(
        cls,
        code: str,
        state: Optional[str] = None,
        *,
        config: Optional[PassportConfig] = None,
        http: Optional[HTTPClient] = None,
    ) -> Self:
        """Builds a passport with the credentials from :meth:`PassportConfig.from_env`."""
        config = config or PassportConfig.from_env()
        return cls(
            code=code,
            state=state,
            client_id=config.client_id,
            client_secret=config.client_secret,
            redirect_uri=config.redirect_uri,
            scope=config.scope,
            bot_token=config.bot_token,
            http=http,
        )

    def __repr__(self) -> str:
        return f'<Passport client_id={self.client_id!r} scope={self.scope!r} opened={self._token is not None}>'

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Closes the HTTP session if this passport created it."""
        if self._owns_http:
            await self.http.close()

    @property
    def code(self) -> str:
        return self._code

    @property
    def current_token(self) -> Optional[PassportToken]:
        """The latest token snapshot, ``None`` until :meth:`open` succeeds."""
        return self._token

    @property
    def token(self) -> Optional[str]:
        return self._token.access_token if self._token else None

    @property
    def token_type(self) -> Optional[str]:
        return self._token.token_type if self._token else None

    @property
    def refresh_token(self) -> Optional[str]:
        return self._token.refresh_token if self._token else None

    @property
    def expires_in(self) -> Optional[int]:
        return self._token.expires_in if self._token else None

    def has_scope(self, scope: str) -> bool:
        return scope in self.scope

    def build_authorize_url(self, state: Optional[str] = None, **params: Any) -> str:
        """Gets the URL to send the user to, using this passport's options.

        Parameters
        -----------
        state: Optional[:class:`str`]
            The state for this authorization request. Defaults to the
            passport's own ``state``.
        **params
            Additional query parameters to include.
        """
        return utils.oauth_url(
            self.client_id,
            redirect_uri=self.redirect_uri,
            scope=self.scope,
            state=state if state is not None else self.state,
            **params,
        )

    def _token_payload(self, grant_type: str, **fields: str) -> Dict[str, str]:
        payload = {
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'grant_type': grant_type,
            **fields,
            'redirect_uri': self.redirect_uri,
            'scope': utils.join_scope(self.scope),
        }
        if self.state:
            payload['state'] = self.state
        return payload

    def _opened_token(self, method: str) -> PassportToken:
        if self._token is None:
            raise PreconditionError(f'The method {method} requires an opened passport.')
        return self._token

    async def _exchange(self, payload: Dict[str, str]) -> PassportToken:
        route = Route('POST', '/oauth2/token')
        try:
            data = await self.http.request(route, data=payload)
        except HTTPException as exc:
            # Discord explains rejected grants in the body
            data = exc.data

        if data is None:
            raise RequestError('Unable to fetch the token with given options. Make sure they are correct.')

        if not isinstance(data, dict) or 'access_token' not in data:
            raise TokenExchangeError(data)

        self._token = PassportToken(data)
        _log.debug('Exchanged %s grant for client %s.', payload['grant_type'], self.client_id)
        return self._token

    async def _fetch_scope(self, token: PassportToken, scope: str, path: str) -> Any:
        route = Route('GET', path)
        try:
            return await self.http.request(route, headers=token.get_auth_header())
        except RequestError as exc:
            raise AuthorizationError(scope) from exc

    async def open(self) -> PassportToken:
        """Exchanges the code for a token and fetches what the scopes allow.

        ``user``, ``guilds`` and ``connections`` are filled for the
        ``identify``, ``guilds`` and ``connections`` scopes respectively.

        Raises
        -------
        RequestError
            The token request failed or returned nothing.
        TokenExchangeError
            Discord did not hand out an access token.
        AuthorizationError
            Fetching one of the scoped resources failed.

        Returns
        --------
        :class:`PassportToken`
            The new token.
        """
        token = await self._exchange(self._token_payload('authorization_code', code=self._code))

        for scope, attr, path in PROFILE_ROUTES:
            if self.has_scope(scope):
                setattr(self, attr, await self._fetch_scope(token, scope, path))

        return token

    async def refresh(self) -> PassportToken:
        """Refreshes the access token using the current refresh token.

        Raises
        -------
        PreconditionError
            The passport was never opened.
        RequestError
            The token request failed or returned nothing.
        TokenExchangeError
            Discord did not hand out an access token.
        """
        if not self.refresh_token:
            raise PreconditionError('Attempted to refresh authorization before opening one.')

        return await self._exchange(self._token_payload('refresh_token', refresh_token=self.refresh_token))

    async def revoke(self) -> None:
        """Revokes the current access token and forgets it."""
        if self._token is None:
            raise PreconditionError('Attempted to revoke authorization before opening one.')

        payload = {
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'token': self._token.access_token,
        }
        await self.http.request(Route('POST', '/oauth2/token/revoke'), data=payload)
        self._token = None

    async def join_guild(
        self,
        guild: str,
        nick: Optional[str] = None,
        roles: Optional[SnowflakeList] = None,
        mute: bool = False,
        deaf: bool = False,
    ) -> Optional[GuildMember]:
        """Adds the user to a guild, requires the ``guilds.join`` scope.

        Parameters
        -----------
        guild: :class:`str`
            The ID of the guild to add the user to.
        nick: Optional[:class:`str`]
            Value to set the user's nickname to. Requires ``MANAGE_NICKNAMES``.
        roles: Optional[List[:class:`str`]]
            Role IDs the member is assigned. Requires ``MANAGE_ROLES``.
        mute: :class:`bool`
            Whether the user is muted in voice channels. Requires ``MUTE_MEMBERS``.
        deaf: :class:`bool`
            Whether the user is deafened in voice channels. Requires ``DEAFEN_MEMBERS``.

        Returns
        --------
        Optional[:class:`dict`]
            The new member, or ``None`` if the user already was one.
        """
        if not self.has_scope(OAuth2Scope.GUILDS_JOIN):
            raise MissingScope(OAuth2Scope.GUILDS_JOIN, 'join_guild')
        if not guild:
            raise MissingParameter('guild')
        utils.validate_snowflake(guild, 'guild')
        token = self._opened_token('join_guild')
        if not self.user or 'id' not in self.user:
            raise PreconditionError('The method join_guild requires the identify scope.')

        payload: GuildJoinPayload = {
            'access_token': token.access_token,
            'nick': nick,
            'roles': roles,
            'mute': mute,
            'deaf': deaf,
        }
        headers = {'Authorization': f'Bot {self.bot_token}'} if self.bot_token else None

        route = Route('PUT', '/guilds/{guild_id}/members/{user_id}', guild_id=guild, user_id=self.user['id'])
        try:
            return await self.http.request(route, headers=headers, json=payload)
        except RequestError as exc:
            raise GuildJoinError(guild) from exc

    async def fetch_guild_member(self, guild: str) -> GuildMember:
        """Fetches the user's member object in a guild.

        Requires the ``guilds.members.read`` scope.
        """
        if not self.has_scope(OAuth2Scope.GUILDS_MEMBERS_READ):
            raise MissingScope(OAuth2Scope.GUILDS_MEMBERS_READ, 'fetch_guild_member')
        if not guild:
            raise MissingParameter('guild')
        utils.validate_snowflake(guild, 'guild')
        token = self._opened_token('fetch_guild_member')

        route = Route('GET', '/users/@me/guilds/{guild_id}/member', guild_id=guild)
        return await self._fetch_scope(token, OAuth2Scope.GUILDS_MEMBERS_READ, route.url_path)
