"""
API Clients for external services
"""

from .igdb_client import IGDBClient, IGDBError, IGDBAuthError
from .twitch_auth import Credentials, TwitchAuthClient, TokenRequestError
from .token_cache import TokenCache

__all__ = [
    'IGDBClient',
    'IGDBError',
    'IGDBAuthError',
    'Credentials',
    'TwitchAuthClient',
    'TokenRequestError',
    'TokenCache',
]
