# SPDX-License-Identifier: MIT

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError

__all__ = (
    "PassportConfig",
)

load_dotenv()

ENV_PREFIX = "DISCORD_"


@dataclass(frozen=True)
class PassportConfig:
    """Application credentials shared by every passport of one application.

    Read from ``DISCORD_CLIENT_ID``, ``DISCORD_CLIENT_SECRET``,
    ``DISCORD_REDIRECT_URI``, ``DISCORD_SCOPE`` (space separated) and the
    optional ``DISCORD_BOT_TOKEN``. A ``.env`` file in the working directory
    is loaded on import.
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    scope: List[str] = field(default_factory=list)
    bot_token: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> PassportConfig:
        env = os.environ if environ is None else environ

        values = {}
        for name in ("client_id", "client_secret", "redirect_uri", "scope"):
            value = env.get(ENV_PREFIX + name.upper(), "").strip()
            if not value:
                raise ConfigError(name, f"Missing the {ENV_PREFIX}{name.upper()} environment variable.")
            values[name] = value

        return cls(
            client_id=values["client_id"],
            client_secret=values["client_secret"],
            redirect_uri=values["redirect_uri"],
            scope=values["scope"].split(),
            bot_token=env.get(ENV_PREFIX + "BOT_TOKEN") or None,
        )
