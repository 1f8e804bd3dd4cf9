import json
from dataclasses import replace

import pytest

from videogame_quickadd.clients import IGDBAuthError, IGDBError, TokenRequestError
from videogame_quickadd.session import QUERY_PLACEHOLDERS, SessionAborted, run_session


def test_quake_without_cover(context, host):
    context.igdb_client.search_games.return_value = [
        {'id': 333, 'name': 'Quake', 'first_release_date': 780969600}
    ]

    variables = run_session(context)

    assert variables['year'] == 1994
    assert variables['releaseDate'] == '1994-10-01'
    assert variables['posterUrl'] == ' '
    assert variables['posterPath'] == ' '
    assert variables['templatePoster'] == '![]( )'
    assert variables['original'] == {'id': 333, 'name': 'Quake', 'first_release_date': 780969600}
    assert host.suggestions == [['Quake (1994)']]
    assert host.notifications == []
    context.cover_downloader.download_cover.assert_not_called()


def test_downloaded_cover_is_embedded(context, quake):
    context.igdb_client.search_games.return_value = [quake]
    context.cover_downloader.download_cover.return_value = 'Games/posters/Quake-co1x7d.jpg'

    variables = run_session(context)

    context.cover_downloader.download_cover.assert_called_once_with(
        'https://images.igdb.com/igdb/image/upload/t_cover_big/co1x7d.jpg', 'Quake', 'Games/posters'
    )
    assert variables['posterPath'] == 'Games/posters/Quake-co1x7d.jpg'
    assert variables['templatePoster'] == '![[Games/posters/Quake-co1x7d.jpg]]'
    assert variables['developer'] == "'[[id Software]]'"


def test_failed_cover_download_falls_back_to_remote_url(context, quake):
    context.igdb_client.search_games.return_value = [quake]

    variables = run_session(context)

    assert variables['posterPath'] == ' '
    assert variables['templatePoster'] == '![](https://images.igdb.com/igdb/image/upload/t_cover_big/co1x7d.jpg)'


def test_first_session_mints_and_caches_token(context, tmp_path):
    context.igdb_client.search_games.return_value = [{'id': 1, 'name': 'Quake'}]

    run_session(context)

    context.auth_client.request_token.assert_called_once()
    assert json.loads((tmp_path / '.obsidian' / 'igdbToken.json').read_text()) == {'igdbToken': 'fresh-token'}
    context.igdb_client.search_games.assert_called_once_with('Quake', 'fresh-token', 15)


def test_stale_cached_token_is_refreshed(context):
    context.token_cache.write('stale-token')
    context.igdb_client.search_games.side_effect = [IGDBAuthError("401", 401), [{'id': 1, 'name': 'Quake'}]]

    variables = run_session(context)

    assert variables['templateTitle'] == 'Quake'
    context.auth_client.request_token.assert_called_once()
    assert context.token_cache.try_read() == 'fresh-token'


def test_token_failure_aborts(context, host):
    context.auth_client.request_token.side_effect = TokenRequestError("invalid client")

    with pytest.raises(SessionAborted, match='Failed to refresh access token.'):
        run_session(context)
    assert host.notifications == ['Failed to refresh access token.']
    assert host.prompts == []


@pytest.mark.parametrize("query", [None, '', '   '])
def test_empty_query_aborts(context, host, query):
    host.query = query

    with pytest.raises(SessionAborted, match='No query entered.'):
        run_session(context)
    assert host.notifications == ['No query entered.']
    context.igdb_client.search_games.assert_not_called()


def test_zero_results_abort(context, host):
    context.igdb_client.search_games.return_value = []

    with pytest.raises(SessionAborted, match='No results found.'):
        run_session(context)
    assert host.notifications == ['No results found.']
    assert host.suggestions == []
    context.auth_client.request_token.assert_called_once()


def test_provider_failure_aborts(context, host):
    context.igdb_client.search_games.side_effect = IGDBError("IGDB API error: 503", 503)

    with pytest.raises(SessionAborted, match='Failed to fetch game results.') as excinfo:
        run_session(context)
    assert host.notifications == ['Failed to fetch game results.']
    assert excinfo.value.__cause__ is not None


def test_no_selection_aborts(context, host, quake):
    host.choice = None
    context.igdb_client.search_games.return_value = [quake]

    with pytest.raises(SessionAborted, match='No choice selected.'):
        run_session(context)
    assert host.notifications == ['No choice selected.']
    context.cover_downloader.download_cover.assert_not_called()


def test_prompt_placeholder_without_clipboard(context, host):
    host.clipboard = '  Daikatana \n'
    context.igdb_client.search_games.return_value = [{'id': 1, 'name': 'Quake'}]

    run_session(context)
    header, placeholder, value = host.prompts[0]
    assert header == 'Enter video game title: '
    assert placeholder[len('ex. '):] in QUERY_PLACEHOLDERS
    assert value == ''


def test_clipboard_seed_when_enabled(context, host, settings):
    context.settings = replace(settings, use_clipboard=True)
    host.clipboard = '  Daikatana \n'
    context.igdb_client.search_games.return_value = [{'id': 1, 'name': 'Daikatana'}]

    run_session(context)
    assert host.prompts[0][2] == 'Daikatana'
