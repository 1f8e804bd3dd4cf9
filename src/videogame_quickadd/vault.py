"""
Local vault file access.

Paths are vault-relative and use forward slashes, the way Obsidian's
``vault.adapter`` addresses files.
"""

import os
import re
import unicodedata
from pathlib import Path
from typing import Union


def normalize_path(path: str) -> str:
    """
    Clean up a vault-relative path the way Obsidian's ``normalizePath`` does.

    Examples:
        >>> normalize_path("/Games//posters/")
        'Games/posters'
        >>> normalize_path("")
        '/'
    """
    path = re.sub(r'[\\/]+', '/', path)
    path = path.strip('/')
    path = path.replace('\u00A0', ' ').replace('\u202F', ' ')
    path = unicodedata.normalize('NFC', path)
    return path or '/'


class VaultAdapter:
    """File system operations rooted at an Obsidian vault directory"""

    def __init__(self, vault_path: Union[str, Path]):
        self.vault_path = Path(vault_path)

    def _full_path(self, path: str) -> Path:
        path = normalize_path(path)
        if path == '/':
            return self.vault_path
        return self.vault_path / path

    def exists(self, path: str) -> bool:
        return self._full_path(path).exists()

    def mkdir(self, path: str):
        self._full_path(path).mkdir(parents=True, exist_ok=True)

    def read(self, path: str) -> str:
        with open(self._full_path(path), 'r', encoding='utf-8') as f:
            return f.read()

    def write(self, path: str, content: str):
        with open(self._full_path(path), 'w', encoding='utf-8') as f:
            f.write(content)

    def write_binary(self, path: str, data: bytes):
        """Write ``data`` atomically. A failed write leaves no file at ``path``."""
        target = self._full_path(path)
        partial = target.with_name(target.name + '.part')
        try:
            with open(partial, 'wb') as f:
                f.write(data)
            os.replace(partial, target)
        except OSError:
            partial.unlink(missing_ok=True)
            raise
