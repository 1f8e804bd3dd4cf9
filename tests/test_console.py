import json
from unittest.mock import patch

import pytest

from videogame_quickadd.console import ConsoleHost, main
from videogame_quickadd.session import SessionAborted


@pytest.fixture(autouse=True)
def credentials(monkeypatch):
    monkeypatch.setenv('IGDB_CLIENT_ID', 'cid')
    monkeypatch.setenv('IGDB_CLIENT_SECRET', 'secret')
    monkeypatch.delenv('QUICKADD_USE_CLIPBOARD', raising=False)
    monkeypatch.delenv('QUICKADD_NOTES_FOLDER', raising=False)


def test_console_prompt_uses_seed_on_empty_answer(monkeypatch):
    monkeypatch.setattr('builtins.input', lambda _: '')
    assert ConsoleHost().prompt('Title:', 'ex. Quake', 'Daikatana') == 'Daikatana'

    monkeypatch.setattr('builtins.input', lambda _: ' Shenmue ')
    assert ConsoleHost().prompt('Title:', 'ex. Quake', 'Daikatana') == 'Shenmue'


def test_console_suggest(monkeypatch, capsys):
    monkeypatch.setattr('builtins.input', lambda _: '2')
    assert ConsoleHost().suggest(['Quake (1996)', 'Quake II (1997)'], ['q1', 'q2']) == 'q2'
    assert 'Quake II (1997)' in capsys.readouterr().out

    for answer in ['', '0', '3', 'abc']:
        monkeypatch.setattr('builtins.input', lambda _: answer)
        assert ConsoleHost().suggest(['a', 'b'], ['A', 'B']) is None


def test_console_prompt_eof(monkeypatch):
    def raise_eof(_):
        raise EOFError()

    monkeypatch.setattr('builtins.input', raise_eof)
    assert ConsoleHost().prompt('Title:') is None


@patch('videogame_quickadd.console.run_session')
def test_main_prints_variables(mock_session, tmp_path, capsys):
    mock_session.return_value = {'original': {'id': 1}, 'fileName': 'Quake (1994)'}

    assert main(['--vault', str(tmp_path), '--seed', 'Quake']) == 0

    assert json.loads(capsys.readouterr().out) == {'fileName': 'Quake (1994)'}
    context = mock_session.call_args[0][0]
    assert context.settings.use_clipboard is True
    assert context.host.get_clipboard() == 'Quake'


@patch('videogame_quickadd.console.run_session')
def test_main_writes_note(mock_session, tmp_path):
    mock_session.return_value = {'original': {}, 'fileName': 'Quake (1994)'}

    assert main(['--vault', str(tmp_path), '--write']) == 0
    assert (tmp_path / 'Games' / 'Quake (1994).md').exists()


@patch('videogame_quickadd.console.run_session')
def test_main_aborted(mock_session, tmp_path):
    mock_session.side_effect = SessionAborted('No query entered.')
    assert main(['--vault', str(tmp_path)]) == 1


@patch('videogame_quickadd.console.load_dotenv')
@patch('videogame_quickadd.console.run_session')
def test_main_without_credentials(mock_session, mock_dotenv, tmp_path, monkeypatch):
    monkeypatch.delenv('IGDB_CLIENT_ID')
    monkeypatch.delenv('IGDB_CLIENT_SECRET')

    assert main(['--vault', str(tmp_path)]) == 1
    mock_session.assert_not_called()
