"""
QuickAdd session: one game title in, one set of note variables out.

A session asks for a title, searches IGDB, lets the user pick a match,
downloads the cover and returns the variables the note template uses.
"""

import logging
import random
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests

from .clients import Credentials, IGDBClient, TokenCache, TokenRequestError, TwitchAuthClient
from .covers import CoverDownloader
from .formatters import EMPTY, EMPTY_TEMPLATE_VALUE, GAME_FIELDS, pick, suggestion_title, to_template_value
from .pipeline import QueryFailedError, execute_query, read_or_refresh_token, refresh_token
from .vault import VaultAdapter

logger = logging.getLogger(__name__)

QUERY_PLACEHOLDERS = [
    'Leisure Suit Larry: Love for Sail!',
    'Cyberpunk 2077',
    'Shenmue',
    'Super Mario Bros. 3',
    'Daikatana',
    'Quake',
]


class SessionAborted(RuntimeError):
    """The session stopped before producing a record. The host was notified."""


class Host:
    """What the surrounding application provides: prompts and notifications"""

    def prompt(self, header: str, placeholder: str = '', value: str = '') -> Optional[str]:
        raise NotImplementedError()

    def suggest(self, display_items: List[str], items: List[Any]) -> Optional[Any]:
        raise NotImplementedError()

    def notify(self, message: str):
        raise NotImplementedError()

    def get_clipboard(self) -> str:
        return ''


@dataclass(frozen=True)
class QuickAddSettings:
    client_id: str
    client_secret: str
    poster_base_path: str = ''
    use_clipboard: bool = False
    config_dir: str = '.obsidian'

    @property
    def credentials(self) -> Credentials:
        return Credentials(self.client_id, self.client_secret)


@dataclass
class SessionContext:
    """Everything a single session talks to"""

    host: Host
    settings: QuickAddSettings
    adapter: VaultAdapter
    igdb_client: IGDBClient
    auth_client: TwitchAuthClient
    token_cache: TokenCache
    cover_downloader: CoverDownloader

    @classmethod
    def create(cls, host: Host, settings: QuickAddSettings, vault_path: Union[str, Path]) -> "SessionContext":
        adapter = VaultAdapter(vault_path)
        http = requests.Session()
        return cls(
            host=host,
            settings=settings,
            adapter=adapter,
            igdb_client=IGDBClient(settings.client_id, session=http),
            auth_client=TwitchAuthClient(session=http),
            token_cache=TokenCache.in_config_dir(adapter, settings.config_dir),
            cover_downloader=CoverDownloader(adapter, session=http),
        )


def abort(host: Host, message: str, cause: Optional[BaseException] = None):
    host.notify(message)
    raise SessionAborted(message) from cause


def run_session(context: SessionContext) -> Dict[str, Any]:
    """
    Run one QuickAdd session.

    Returns:
        Template variables for the selected game

    Raises:
        SessionAborted: No query, no results, no selection, or IGDB failure
    """
    host = context.host
    settings = context.settings
    credentials = settings.credentials

    try:
        token = read_or_refresh_token(context.token_cache, context.auth_client, credentials)
    except TokenRequestError as e:
        logger.error(str(e))
        abort(host, 'Failed to refresh access token.', e)

    seed = host.get_clipboard().strip() if settings.use_clipboard else ''
    query = host.prompt('Enter video game title: ', f'ex. {random.choice(QUERY_PLACEHOLDERS)}', seed)
    if not query or not query.strip():
        abort(host, 'No query entered.')

    logger.info(f"🎮 Searching for '{query.strip()}'...")
    try:
        results = execute_query(
            context.igdb_client,
            query.strip(),
            token,
            partial(refresh_token, context.token_cache, context.auth_client, credentials),
        )
    except QueryFailedError as e:
        logger.error(str(e))
        abort(host, 'Failed to fetch game results.', e)

    if not results:
        abort(host, 'No results found.')

    selected = host.suggest([suggestion_title(game) for game in results], results)
    if not selected:
        abort(host, 'No choice selected.')

    return build_variables(context, selected)


def build_variables(context: SessionContext, game: Dict[str, Any]) -> Dict[str, Any]:
    """Note variables for one IGDB game, with the cover downloaded if possible"""
    record = pick(game, GAME_FIELDS)

    poster_path = None
    if record['posterUrl'] is not EMPTY:
        poster_path = context.cover_downloader.download_cover(
            record['posterUrl'],
            game.get('name', ''),
            context.settings.poster_base_path,
        )

    variables = {'original': game}
    variables.update({key: to_template_value(value) for key, value in record.items()})
    variables['posterPath'] = poster_path or EMPTY_TEMPLATE_VALUE
    if poster_path:
        variables['templatePoster'] = f"![[{poster_path}]]"
    else:
        variables['templatePoster'] = f"![]({variables['posterUrl']})"
    return variables
