"""
Centralized API Key Manager

Reads IGDB credentials and QuickAdd options from ``Keys/api_keys.json`` in
the vault. Environment variables take precedence over the file:

    IGDB_CLIENT_ID, IGDB_CLIENT_SECRET     Twitch application credentials
    QUICKADD_POSTER_PATH                   vault folder for cover art
    QUICKADD_USE_CLIPBOARD                 pre-fill the title prompt
    QUICKADD_NOTES_FOLDER                  vault folder for game notes
    OBSIDIAN_VAULT_PATH                    vault root
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Tuple, Optional

from .session import QuickAddSettings


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class KeyManager:
    """Credentials and options for a vault"""

    def __init__(self, vault_path: Optional[str] = None):
        """
        Args:
            vault_path: Obsidian vault root. Defaults to OBSIDIAN_VAULT_PATH,
                        then the working directory.
        """
        self.vault_path = Path(vault_path or os.getenv("OBSIDIAN_VAULT_PATH") or os.getcwd())
        self.keys_path = self.vault_path / "Keys" / "api_keys.json"
        self._keys: Optional[Dict[str, Any]] = None

    def has_keys_file(self) -> bool:
        return self.keys_path.exists()

    def load_keys(self) -> Dict[str, Any]:
        """Parsed keys file, read once"""
        if not self.has_keys_file():
            raise FileNotFoundError(
                f"API keys file not found at {self.keys_path}. "
                f"Please create it or set IGDB_CLIENT_ID and IGDB_CLIENT_SECRET."
            )

        if self._keys is None:
            try:
                self._keys = json.loads(self.keys_path.read_text(encoding='utf-8'))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {self.keys_path}: {e}") from e
            except OSError as e:
                raise RuntimeError(f"Failed to load API keys from {self.keys_path}: {e}") from e
        return self._keys

    def _quickadd_option(self, name: str, default: Any) -> Any:
        if not self.has_keys_file():
            return default
        return self.load_keys().get("quickadd", {}).get(name, default)

    def get_igdb_keys(self) -> Tuple[str, str]:
        """Twitch Client ID and Secret"""
        client_id = os.getenv("IGDB_CLIENT_ID")
        client_secret = os.getenv("IGDB_CLIENT_SECRET")
        if client_id and client_secret:
            return client_id, client_secret

        igdb = self.load_keys()["igdb"]
        return igdb["client_id"], igdb["client_secret"]

    def get_poster_base_path(self) -> str:
        return os.getenv("QUICKADD_POSTER_PATH") or self._quickadd_option("poster_base_path", "")

    def get_use_clipboard(self) -> bool:
        env_value = os.getenv("QUICKADD_USE_CLIPBOARD")
        if env_value is not None:
            return _env_flag(env_value)
        return bool(self._quickadd_option("use_clipboard", False))

    def get_notes_folder(self) -> str:
        return os.getenv("QUICKADD_NOTES_FOLDER") or self._quickadd_option("notes_folder", "Games")

    def get_config_dir(self) -> str:
        """Obsidian configuration folder, relative to the vault"""
        return self._quickadd_option("config_dir", ".obsidian")

    def get_quickadd_settings(self) -> QuickAddSettings:
        client_id, client_secret = self.get_igdb_keys()
        return QuickAddSettings(
            client_id=client_id,
            client_secret=client_secret,
            poster_base_path=self.get_poster_base_path(),
            use_clipboard=self.get_use_clipboard(),
            config_dir=self.get_config_dir(),
        )
