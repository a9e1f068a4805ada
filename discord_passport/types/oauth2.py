# SPDX-License-Identifier: MIT

from __future__ import annotations

from typing import List, Optional, TypedDict
from typing_extensions import NotRequired

from .snowflake import Snowflake, SnowflakeList


class Token(TypedDict):
    access_token: str
    token_type: str
    expires_in: NotRequired[int]
    refresh_token: NotRequired[str]
    scope: NotRequired[str]


class Connection(TypedDict):
    id: str
    name: str
    type: str
    revoked: NotRequired[bool]
    verified: bool
    friend_sync: bool
    show_activity: bool
    two_way_link: bool
    visibility: int


class User(TypedDict):
    id: Snowflake
    username: str
    discriminator: str
    global_name: Optional[str]
    avatar: Optional[str]
    bot: NotRequired[bool]
    system: NotRequired[bool]
    mfa_enabled: NotRequired[bool]
    locale: NotRequired[str]
    verified: NotRequired[bool]
    email: NotRequired[Optional[str]]
    flags: NotRequired[int]
    premium_type: NotRequired[int]
    public_flags: NotRequired[int]


class PartialGuild(TypedDict):
    id: Snowflake
    name: str
    icon: Optional[str]
    owner: bool
    permissions: str
    features: List[str]


# Guild objects returned by /users/@me/guilds are partial
Guild = PartialGuild


class GuildMember(TypedDict):
    roles: SnowflakeList
    joined_at: str
    deaf: bool
    mute: bool
    flags: int
    user: NotRequired[User]
    pending: NotRequired[bool]
    nick: NotRequired[Optional[str]]


class GuildJoinPayload(TypedDict):
    access_token: str
    nick: Optional[str]
    roles: Optional[SnowflakeList]
    mute: bool
    deaf: bool


class OAuth2Scope:
    """OAuth2 scopes that can be requested"""
    CONNECTIONS = "connections"
    EMAIL = "email"
    GDM_JOIN = "gdm.join"
    GUILDS = "guilds"
    GUILDS_JOIN = "guilds.join"
    GUILDS_MEMBERS_READ = "guilds.members.read"
    IDENTIFY = "identify"
    MESSAGES_READ = "messages.read"
    ROLE_CONNECTIONS_WRITE = "role_connections.write"
    RPC = "rpc"
    VOICE = "voice"
    WEBHOOK_INCOMING = "webhook.incoming"
