"""
Token lifecycle and the IGDB search with one refresh-and-retry.

The cached token has no expiry. It is refreshed only when IGDB answers a
search with 401, and the search is then retried exactly once.
"""

import logging
from typing import Any, Callable, Dict, List

from .clients import (
    Credentials,
    IGDBAuthError,
    IGDBClient,
    IGDBError,
    TokenCache,
    TokenRequestError,
    TwitchAuthClient,
)

logger = logging.getLogger(__name__)


class QueryFailedError(Exception):
    """The game search failed and cannot be retried"""


def refresh_token(cache: TokenCache, authority: TwitchAuthClient, credentials: Credentials) -> str:
    """Mint a new token and persist it. A failed write keeps the token usable."""
    token = authority.request_token(credentials)
    if cache.write(token):
        logger.info("✓ Saved new IGDB access token")
    return token


def read_or_refresh_token(cache: TokenCache, authority: TwitchAuthClient, credentials: Credentials) -> str:
    """
    Token to start the session with.

    Raises:
        TokenRequestError: No cached token and Twitch refused to issue one
    """
    token = cache.try_read()
    if token:
        return token

    logger.info("No cached IGDB token, requesting a new one")
    return refresh_token(cache, authority, credentials)


def execute_query(
    client: IGDBClient,
    query: str,
    token: str,
    refresh: Callable[[], str],
    limit: int = IGDBClient.SEARCH_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Search IGDB, refreshing the token once if it was rejected.

    Args:
        client: IGDB client
        query: Title to search for
        token: Current bearer token
        refresh: Returns a freshly issued (and persisted) token
        limit: Maximum number of results

    Returns:
        The game list. An empty list is a valid answer, not a failure.

    Raises:
        QueryFailedError: Non-auth failure, failed refresh, or failed retry
    """
    try:
        return client.search_games(query, token, limit)
    except IGDBAuthError as e:
        logger.info(f"IGDB rejected the access token, refreshing: {e}")
    except IGDBError as e:
        raise QueryFailedError(f"Failed to fetch game results: {e}") from e

    try:
        new_token = refresh()
        return client.search_games(query, new_token, limit)
    except (TokenRequestError, IGDBError) as e:
        raise QueryFailedError(f"Failed to fetch game results: {e}") from e
