"""
Discord OAuth2 Passport
~~~~~~~~~~~~~~~~~~~~~~~

A helper for completing Discord's OAuth2 Authorization Code flow.

:copyright: (c) 2025 Mahirox36
:license: MIT, see LICENSE for more details.
"""

__title__ = "discord_passport"
__license__ = "MIT"
__version__ = "1.0.0"

import logging

from .config import PassportConfig
from .errors import *
from .http import HTTPClient, Route
from .passport import Passport
from .token import PassportToken
from .types.oauth2 import OAuth2Scope
from .utils import oauth_url

logging.getLogger(__name__).addHandler(logging.NullHandler())
