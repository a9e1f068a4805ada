"""
discord_passport.http
~~~~~~~~~~~~~~~~~~~~~

The single seam between the OAuth2 flow and the network.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, ClassVar, Dict, Optional
from urllib.parse import quote as _uriquote

import aiohttp
from aiohttp import BaseConnector, BasicAuth

from .errors import HTTPException, RequestError

__all__ = (
    'Route',
    'HTTPClient',
)

_log = logging.getLogger(__name__)

DISCORD_API_URL = 'https://discord.com/api'


async def json_or_text(response: aiohttp.ClientResponse) -> Any:
    text = await response.text(encoding='utf-8')
    if not text:
        return None
    try:
        if response.headers.get('content-type', '').startswith('application/json'):
            return json.loads(text)
    except ValueError:
        pass
    return text


class Route:
    """A method and a fixed API path.

    Keyword arguments are substituted into ``path`` after being URL quoted,
    so ``Route('PUT', '/guilds/{guild_id}/members/{user_id}', guild_id=..., user_id=...)``
    never lets a caller escape the path.
    """

    BASE: ClassVar[str] = DISCORD_API_URL

    def __init__(self, method: str, path: str, **parameters: Any) -> None:
        self.method: str = method
        self.path: str = path
        if parameters:
            path = path.format_map(
                {k: _uriquote(v, safe='') if isinstance(v, str) else v for k, v in parameters.items()}
            )
        self.url_path: str = path

    def __repr__(self) -> str:
        return f'<Route {self.method} {self.url_path}>'

    def url(self, base: Optional[str] = None) -> str:
        return (base or self.BASE).rstrip('/') + self.url_path


class HTTPClient:
    """Represents an HTTP client sending requests to the Discord API.

    The underlying :class:`aiohttp.ClientSession` is created on first use.

    Parameters
    -----------
    connector: Optional[:class:`aiohttp.BaseConnector`]
        The connector to use for the client session.
    proxy: Optional[:class:`str`]
        Optional proxy URL to use for requests.
    proxy_auth: Optional[:class:`aiohttp.BasicAuth`]
        Optional proxy authentication.
    base_url: :class:`str`
        The root every :class:`Route` is resolved against.
    """

    def __init__(
        self,
        *,
        connector: Optional[BaseConnector] = None,
        proxy: Optional[str] = None,
        proxy_auth: Optional[BasicAuth] = None,
        base_url: str = DISCORD_API_URL,
    ) -> None:
        self.connector: Optional[BaseConnector] = connector
        self.proxy: Optional[str] = proxy
        self.proxy_auth: Optional[BasicAuth] = proxy_auth
        self.base_url: str = base_url
        self.__session: Optional[aiohttp.ClientSession] = None

    @property
    def closed(self) -> bool:
        return self.__session is None or self.__session.closed

    def _get_session(self) -> aiohttp.ClientSession:
        if self.__session is None or self.__session.closed:
            self.__session = aiohttp.ClientSession(
                connector=self.connector,
                connector_owner=self.connector is None,
            )
        return self.__session

    async def close(self) -> None:
        if self.__session is not None:
            await self.__session.close()
            self.__session = None

    async def request(
        self,
        route: Route,
        *,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """Sends one request and returns the parsed body.

        ``data`` is sent form encoded, ``json`` as a JSON document.

        Raises
        -------
        RequestError
            The request could not be sent, or its body could not be decoded.
        HTTPException
            Discord answered with a non-2xx status.
        """
        method = route.method
        url = route.url(self.base_url)
        headers = {'Accept': 'application/json', **(headers or {})}

        kwargs: Dict[str, Any] = {'headers': headers}
        if data is not None:
            kwargs['data'] = data
        if json is not None:
            kwargs['json'] = json
        if self.proxy is not None:
            kwargs['proxy'] = self.proxy
        if self.proxy_auth is not None:
            kwargs['proxy_auth'] = self.proxy_auth

        session = self._get_session()
        try:
            async with session.request(method, url, **kwargs) as response:
                _log.debug('%s %s has returned %s', method, url, response.status)
                try:
                    body = await json_or_text(response)
                except UnicodeDecodeError as exc:
                    raise RequestError(f'{method} {route.url_path} returned an undecodable body') from exc

                if 200 <= response.status < 300:
                    return body

                raise HTTPException(response.status, response.reason or '', body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            _log.debug('%s %s could not be sent: %r', method, url, exc)
            raise RequestError(f'Unable to send {method} {route.url_path}: {exc}') from exc
