import copy
from unittest.mock import Mock

import pytest

from videogame_quickadd.clients import TokenCache
from videogame_quickadd.session import Host, QuickAddSettings, SessionContext
from videogame_quickadd.vault import VaultAdapter


QUAKE = {
    'id': 333,
    'name': 'Quake',
    'url': 'https://www.igdb.com/games/quake',
    'first_release_date': 780969600,
    'cover': {'id': 1, 'url': '//images.igdb.com/igdb/image/upload/t_thumb/co1x7d.jpg'},
    'platforms': [
        {'id': 6, 'name': 'PC (Microsoft Windows)'},
        {'id': 14, 'name': 'Mac'},
        {'id': 6, 'name': 'PC (Microsoft Windows)'},
    ],
    'genres': [{'id': 5, 'name': 'Shooter'}],
    'keywords': [{'id': 1, 'name': 'lovecraft'}, {'id': 2, 'name': 'bunny hopping'}],
    'franchises': [{'id': 9, 'name': 'Quake'}],
    'alternative_names': [{'id': 4, 'name': 'Quake I'}],
    'game_modes': [{'id': 1, 'name': 'Single player'}, {'id': 2, 'name': 'Multiplayer'}],
    'involved_companies': [
        {'developer': False, 'company': {'name': 'GT Interactive'}},
        {'developer': True, 'company': {
            'name': 'id Software',
            'logo': {'url': '//images.igdb.com/igdb/image/upload/t_thumb/cl2a.png'},
        }},
    ],
    'websites': [
        {'url': 'https://www.idsoftware.com'},
        {'url': 'https://en.wikipedia.org/wiki/Quake_(video_game)'},
    ],
    'storyline': 'Line one.\nLine two.\r\nLine three.',
    'summary': 'Quake is a first-person shooter.',
}


class FakeHost(Host):
    """Scripted answers for a session"""

    def __init__(self, query='Quake', choice=0, clipboard=''):
        self.query = query
        self.choice = choice
        self.clipboard = clipboard
        self.prompts = []
        self.suggestions = []
        self.notifications = []

    def prompt(self, header, placeholder='', value=''):
        self.prompts.append((header, placeholder, value))
        return self.query

    def suggest(self, display_items, items):
        self.suggestions.append(display_items)
        if self.choice is None:
            return None
        return items[self.choice]

    def notify(self, message):
        self.notifications.append(message)

    def get_clipboard(self):
        return self.clipboard


@pytest.fixture
def quake():
    return copy.deepcopy(QUAKE)


@pytest.fixture
def vault(tmp_path):
    return VaultAdapter(tmp_path)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def settings():
    return QuickAddSettings(client_id='client-id', client_secret='client-secret', poster_base_path='Games/posters')


@pytest.fixture
def context(host, settings, vault):
    """Session context with the network clients mocked out"""
    igdb_client = Mock()
    auth_client = Mock()
    auth_client.request_token.return_value = 'fresh-token'
    cover_downloader = Mock()
    cover_downloader.download_cover.return_value = None
    return SessionContext(
        host=host,
        settings=settings,
        adapter=vault,
        igdb_client=igdb_client,
        auth_client=auth_client,
        token_cache=TokenCache.in_config_dir(vault, settings.config_dir),
        cover_downloader=cover_downloader,
    )
