"""
Persisted IGDB token (``<configDir>/igdbToken.json``)
"""

import json
import logging
from typing import Optional

from ..vault import VaultAdapter, normalize_path

logger = logging.getLogger(__name__)

TOKEN_FILE_NAME = "igdbToken.json"


class TokenCache:
    """Reads and writes the single cached bearer token.

    The file holds no expiry: a stale token is only noticed when IGDB
    rejects it.
    """

    def __init__(self, adapter: VaultAdapter, path: str):
        self.adapter = adapter
        self.path = normalize_path(path)

    @classmethod
    def in_config_dir(cls, adapter: VaultAdapter, config_dir: str) -> "TokenCache":
        return cls(adapter, f"{config_dir}/{TOKEN_FILE_NAME}")

    def try_read(self) -> Optional[str]:
        """Cached token, or None if the file is missing or unreadable"""
        if not self.adapter.exists(self.path):
            return None

        try:
            cache = json.loads(self.adapter.read(self.path))
            token = cache.get('igdbToken') if isinstance(cache, dict) else None
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️  Failed reading auth token from {self.path}: {e}")
            return None

        return token if isinstance(token, str) and token else None

    def write(self, token: str) -> bool:
        """Save token to cache. Failures are logged, not raised."""
        config_dir = self.path.rpartition('/')[0]
        try:
            if config_dir and not self.adapter.exists(config_dir):
                self.adapter.mkdir(config_dir)
            self.adapter.write(self.path, json.dumps({'igdbToken': token}))
        except OSError as e:
            logger.warning(f"⚠️  Could not save auth token to {self.path}: {e}")
            return False
        return True
