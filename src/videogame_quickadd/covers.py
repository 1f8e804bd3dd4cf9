"""
Cover art download into the vault
"""

import logging
import requests
from typing import Optional

from .text_utils import sanitize_filename
from .vault import VaultAdapter, normalize_path

logger = logging.getLogger(__name__)


def sanitize_base_path(base_path: str) -> str:
    """Vault folder for covers, with every path segment sanitized"""
    base_path = base_path.strip()
    if base_path.endswith('/'):
        base_path = base_path[:-1]
    return normalize_path('/'.join(sanitize_filename(segment) for segment in base_path.split('/')))


class CoverDownloader:
    """Downloads poster images next to the notes that embed them"""

    def __init__(self, adapter: VaultAdapter, session: Optional[requests.Session] = None, timeout: float = 10):
        self.adapter = adapter
        self.session = session or requests.Session()
        self.timeout = timeout

    def target_path(self, poster_url: str, game_name: str, base_path: str = '') -> Optional[str]:
        """Vault path the poster is saved to, or None if the URL has no usable file name"""
        if '/' not in poster_url:
            return None

        filename = poster_url[poster_url.rindex('/') + 1:]
        name, dot, ext = filename.rpartition('.')
        if not dot:
            name, ext = filename, ''
        name, ext = sanitize_filename(name), sanitize_filename(ext)
        if not name or not ext:
            return None

        base_path = sanitize_base_path(base_path)
        return normalize_path(f"{base_path}/{sanitize_filename(game_name)}-{name}.{ext}")

    def download_cover(self, poster_url: str, game_name: str, base_path: str = '') -> Optional[str]:
        """Download the poster unless a file with the same name is already there.

        Args:
            poster_url: Full image URL
            game_name: Game title, used as file name prefix
            base_path: Vault folder for posters

        Returns:
            Vault path of the poster, or None if it could not be downloaded
        """
        target_path = self.target_path(poster_url, game_name, base_path)
        if target_path is None:
            logger.warning(f"⚠️  Not a downloadable poster URL: {poster_url!r}")
            return None

        # Same game and file name is assumed to be the same image
        if self.adapter.exists(target_path):
            logger.info(f"✓ Cover already exists: {target_path}")
            return target_path

        folder = sanitize_base_path(base_path)
        try:
            response = self.session.get(
                poster_url,
                headers={'Cache-Control': 'no-cache'},
                timeout=self.timeout
            )
            response.raise_for_status()

            if folder != '/' and not self.adapter.exists(folder):
                self.adapter.mkdir(folder)
            self.adapter.write_binary(target_path, response.content)
        except (requests.RequestException, OSError) as e:
            # Cover art is optional, the note falls back to the remote URL
            logger.warning(f"⚠️  Failed to download cover art: {e}")
            return None

        logger.info(f"✓ Cover downloaded: {target_path}")
        return target_path
