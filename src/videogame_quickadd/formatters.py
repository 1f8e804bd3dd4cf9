"""
Field formatting for IGDB game records.

Turns the nested, optional IGDB fields into the flat values a QuickAdd
note template expects: YAML list blocks, wiki links, dates and image URLs.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .text_utils import collapse_newlines, escape_single_quoted, sanitize_filename


class Empty:
    """Marker for a field that is intentionally blank in the note."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'EMPTY'


EMPTY = Empty()

# Rendered in place of EMPTY so the value is always safe inside front matter
EMPTY_TEMPLATE_VALUE = ' '


def to_template_value(value: Any) -> Any:
    """Convert a record value to what gets substituted into the template."""
    if value is EMPTY or value is None:
        return EMPTY_TEMPLATE_VALUE
    return value


def format_list(items: List[str], linkify: bool = True) -> Union[str, Empty]:
    """
    Format names as an indented YAML list block.

    Args:
        items: Display values, already de-duplicated
        linkify: Wrap each value as an Obsidian wiki link

    Returns:
        A block starting with a newline, one ``  - '<item>'`` per line,
        or EMPTY when there is nothing to list

    Examples:
        >>> format_list(["PC", "Xbox"], linkify=False)
        "\\n  - 'PC'\\n  - 'Xbox'"
    """
    if len(items) == 0 or items[0] == 'N/A':
        return EMPTY

    def decorate(item: str) -> str:
        item = item.strip()
        if linkify:
            return f"'[[{escape_single_quoted(sanitize_filename(item))}]]'"
        return f"'{escape_single_quoted(item)}'"

    return '\n' + '\n'.join(f'  - {decorate(item)}' for item in items)


def list_from_property(prop: str) -> Callable[..., Union[str, Empty]]:
    """Build a formatter that lists ``prop`` of each object, once per value."""
    def formatter(objects: Optional[Iterable[Dict[str, Any]]], linkify: bool = True) -> Union[str, Empty]:
        values = [obj.get(prop) for obj in objects or [] if obj.get(prop) is not None]
        return format_list(list(dict.fromkeys(values)), linkify)

    return formatter


list_from_name = list_from_property('name')
list_from_url = list_from_property('url')


# release dates are UNIX epoch seconds
def release_year(timestamp: Optional[int]) -> Union[int, Empty]:
    if timestamp is None:
        return EMPTY
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).year


def release_date_string(timestamp: Optional[int]) -> Union[str, Empty]:
    if timestamp is None:
        return EMPTY
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime('%Y-%m-%d')


def _first_developer(companies: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    return next((company for company in companies or [] if company.get('developer')), None)


def find_developer(companies: Optional[List[Dict[str, Any]]]) -> Union[str, Empty]:
    """Name of the first involved company flagged as developer."""
    developer = _first_developer(companies)
    name = ((developer or {}).get('company') or {}).get('name')
    return name if name else EMPTY


# For image size names, see https://api-docs.igdb.com/#images
def _resize_image_url(url: Any, size: str) -> Union[str, Empty]:
    if not isinstance(url, str) or not url:
        return EMPTY
    return 'https:' + url.replace('thumb', size, 1)


def poster_url(url: Any) -> Union[str, Empty]:
    return _resize_image_url(url, 'cover_big')


def developer_logo_url(companies: Optional[List[Dict[str, Any]]]) -> Union[str, Empty]:
    developer = _first_developer(companies) or {}
    logo = (developer.get('company') or {}).get('logo') or {}
    return _resize_image_url(logo.get('url'), 'logo_med')


def suggestion_title(game: Dict[str, Any]) -> str:
    """One-line summary shown in the result picker: ``Name (Year) [Platforms]``."""
    platforms = [p.get('name') for p in game.get('platforms') or [] if p.get('name')]
    year = release_year(game.get('first_release_date'))

    title = game.get('name', '')
    if year is not EMPTY:
        title += f' ({year})'
    if platforms:
        title += f" [{', '.join(platforms)}]"
    return title


# Field specs: how each output field is resolved from the source record

@dataclass(frozen=True)
class DirectCopy:
    """Copy the source property with the same name as the output field."""


@dataclass(frozen=True)
class RenameFrom:
    name: str


@dataclass(frozen=True)
class Derive:
    """Compute the value with ``fn(raw_value, source, field_name)``."""
    fn: Callable[[Any, Dict[str, Any], str], Any]


FieldSpec = Union[DirectCopy, RenameFrom, Derive]


def pick(source: Dict[str, Any], specs: Dict[str, FieldSpec]) -> Dict[str, Any]:
    """
    Project a source record onto the fields declared in ``specs``.

    Every field is resolved on its own, in declaration order. A transformer
    returning EMPTY does not affect the others.
    """
    record = {}
    for key, spec in specs.items():
        match spec:
            case DirectCopy():
                value = source.get(key)
            case RenameFrom(name=name):
                value = source.get(name)
            case Derive(fn=fn):
                value = fn(source.get(key), source, key)
            case _:
                raise TypeError(f"Unsupported field spec for '{key}': {spec!r}")
        record[key] = value
    return record


def _title(_, game, __):
    return f"'{escape_single_quoted(game.get('name', ''))}'"


def _file_name(_, game, __):
    year = release_year(game.get('first_release_date'))
    year_suffix = f' ({year})' if year is not EMPTY else ''
    return sanitize_filename(f"{game.get('name', '')}{year_suffix}")


def _franchises(franchises, _, __):
    return list_from_name([
        {**franchise, 'name': f"{franchise['name']} (Franchise)"}
        for franchise in franchises or []
        if franchise.get('name')
    ])


def _aliases(_, game, __):
    alternative_names = game.get('alternative_names') or []
    return list_from_name([*alternative_names, {'name': game.get('name')}], linkify=False)


def _developer_link(_, game, __):
    developer = find_developer(game.get('involved_companies'))
    if developer is EMPTY or not developer.strip():
        return EMPTY
    return f"'[[{escape_single_quoted(sanitize_filename(developer.strip()))}]]'"


def _single_line(text, _, __):
    return collapse_newlines(text) if text is not None else EMPTY


GAME_FIELDS: Dict[str, FieldSpec] = {
    'title': Derive(_title),
    'templateTitle': RenameFrom('name'),
    'posterUrl': Derive(lambda _, game, __: poster_url((game.get('cover') or {}).get('url'))),
    'igdbUrl': RenameFrom('url'),
    'igdbId': RenameFrom('id'),
    'fileName': Derive(_file_name),
    'platforms': Derive(lambda platforms, _, __: list_from_name(platforms)),
    'genres': Derive(lambda genres, _, __: list_from_name(genres)),
    'keywords': Derive(lambda keywords, _, __: list_from_name(keywords)),
    'franchises': Derive(_franchises),
    'aliases': Derive(_aliases),
    'gameModes': Derive(lambda _, game, __: list_from_name(game.get('game_modes'))),
    'developer': Derive(_developer_link),
    'templateDeveloper': Derive(lambda _, game, __: find_developer(game.get('involved_companies'))),
    'developerLogoUrl': Derive(lambda _, game, __: developer_logo_url(game.get('involved_companies'))),
    'year': Derive(lambda _, game, __: release_year(game.get('first_release_date'))),
    'releaseDate': Derive(lambda _, game, __: release_date_string(game.get('first_release_date'))),
    'websites': Derive(lambda websites, _, __: list_from_url(websites, linkify=False)),
    'templateStoryline': Derive(lambda _, game, __: _single_line(game.get('storyline'), game, 'storyline')),
    'templateSummary': Derive(lambda _, game, __: _single_line(game.get('summary'), game, 'summary')),
}
