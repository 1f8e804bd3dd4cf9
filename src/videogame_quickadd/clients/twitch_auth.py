"""
Twitch identity client (IGDB access tokens)
"""

import requests
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str


class TokenRequestError(Exception):
    """Twitch did not issue an access token"""


class TwitchAuthClient:
    """Exchanges client credentials for an IGDB bearer token"""

    AUTH_URL = "https://id.twitch.tv/oauth2/token"
    GRANT_TYPE = "client_credentials"

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30):
        self.session = session or requests.Session()
        self.timeout = timeout

    def request_token(self, credentials: Credentials) -> str:
        """
        Get a new access token from Twitch.

        The token lasts about two months. There is no caching here; see
        TokenCache for persistence.
        """
        params = {
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "grant_type": self.GRANT_TYPE
        }

        try:
            response = self.session.post(
                self.AUTH_URL,
                params=params,
                headers={'Content-Type': 'application/json', 'Cache-Control': 'no-cache'},
                timeout=self.timeout
            )
            token_data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise TokenRequestError(f"Failed to get access token: {e}") from e

        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not access_token:
            raise TokenRequestError(f"Failed to get access token: {response.status_code} {response.text}")
        return access_token
