"""
IGDB API Client
"""

import time
import requests
from typing import Dict, Any, List, Optional


class IGDBError(Exception):
    """IGDB request failed or returned something other than a game list"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class IGDBAuthError(IGDBError):
    """IGDB rejected the bearer token (HTTP 401)"""


class IGDBClient:
    """Client for the IGDB games endpoint"""

    IGDB_BASE_URL = "https://api.igdb.com/v4"
    SEARCH_LIMIT = 15
    # IGDB allows 4 requests per second
    MIN_REQUEST_INTERVAL = 0.25

    # To understand the query syntax, see:
    # https://api-docs.igdb.com/#examples
    # https://api-docs.igdb.com/#game
    # https://api-docs.igdb.com/#expander
    GAME_QUERY_FIELDS = [
        'franchises.name', 'websites.url', 'keywords.name',
        'platforms.name', 'first_release_date', 'involved_companies.developer',
        'involved_companies.company.name', 'involved_companies.company.logo.url',
        'url', 'cover.url', 'genres.name', 'game_modes.name', 'storyline',
        'summary', 'name', 'alternative_names.name'
    ]

    def __init__(self, client_id: str, session: Optional[requests.Session] = None, timeout: float = 30):
        self.client_id = client_id
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': 'VideogameQuickAdd/0.1'})
        self.last_api_call = 0

    def search_games(self, query: str, token: str, limit: int = SEARCH_LIMIT) -> List[Dict[str, Any]]:
        """
        Search for games by title.

        Args:
            query: Free text title to search for
            token: Twitch bearer token
            limit: Maximum number of results

        Returns:
            Raw game records, possibly empty

        Raises:
            IGDBAuthError: The token was rejected
            IGDBError: Any other failure
        """
        self._rate_limit()

        headers = {
            'Client-ID': self.client_id,
            'Authorization': f'Bearer {token}',
            'Cache-Control': 'no-cache'
        }

        try:
            response = self.session.post(
                f"{self.IGDB_BASE_URL}/games",
                headers=headers,
                data=self.build_search_query(query, limit),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise IGDBError(f"IGDB request failed: {e}") from e

        if response.status_code == 401:
            raise IGDBAuthError(f"IGDB API error: {response.status_code} {response.text}", 401)
        if response.status_code != 200:
            raise IGDBError(f"IGDB API error: {response.status_code} {response.text}", response.status_code)

        try:
            games = response.json()
        except ValueError as e:
            raise IGDBError(f"IGDB returned invalid JSON: {e}", response.status_code) from e

        if not isinstance(games, list):
            raise IGDBError(f"IGDB returned an unexpected payload: {games}", response.status_code)
        return games

    def build_search_query(self, query: str, limit: int = SEARCH_LIMIT) -> str:
        escaped = query.replace('\\', '\\\\').replace('"', '\\"')
        return (
            f"fields {', '.join(self.GAME_QUERY_FIELDS)};\n"
            f'search "{escaped}";\n'
            f"limit {limit};\n"
        )

    def _rate_limit(self):
        """Ensure proper spacing between API requests"""
        elapsed = time.time() - self.last_api_call
        if elapsed < self.MIN_REQUEST_INTERVAL:
            time.sleep(self.MIN_REQUEST_INTERVAL - elapsed)
        self.last_api_call = time.time()
