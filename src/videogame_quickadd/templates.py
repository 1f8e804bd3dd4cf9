"""
Game note template in QuickAdd's ``{{VALUE:name}}`` syntax.
"""

import re
import yaml
from typing import Any, Dict

from .formatters import EMPTY_TEMPLATE_VALUE
from .vault import VaultAdapter, normalize_path

VALUE_PATTERN = re.compile(r'\{\{VALUE:([A-Za-z0-9_]+)\}\}')
FRONTMATTER_PATTERN = re.compile(r'\A---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)', re.DOTALL)

DEFAULT_TEMPLATE = """---
tags: game
title: {{VALUE:title}}
year: {{VALUE:year}}
releaseDate: {{VALUE:releaseDate}}
developer: {{VALUE:developer}}
platforms: {{VALUE:platforms}}
genres: {{VALUE:genres}}
gameModes: {{VALUE:gameModes}}
keywords: {{VALUE:keywords}}
franchises: {{VALUE:franchises}}
aliases: {{VALUE:aliases}}
websites: {{VALUE:websites}}
igdbId: {{VALUE:igdbId}}
igdbUrl: {{VALUE:igdbUrl}}
poster: {{VALUE:posterUrl}}
posterPath: {{VALUE:posterPath}}
developerLogo: {{VALUE:developerLogoUrl}}
play_status: Not Played
---

# {{VALUE:templateTitle}}

{{VALUE:templatePoster}}

**Developer:** {{VALUE:templateDeveloper}}
**Release Date:** {{VALUE:releaseDate}}

## Summary
{{VALUE:templateSummary}}

## Storyline
{{VALUE:templateStoryline}}

## Notes
"""


def render_note(variables: Dict[str, Any], template: str = DEFAULT_TEMPLATE) -> str:
    """Substitute note variables; names without a value render as the empty sentinel"""
    def replace(match: re.Match) -> str:
        value = variables.get(match.group(1), EMPTY_TEMPLATE_VALUE)
        return str(value)

    return VALUE_PATTERN.sub(replace, template)


def parse_frontmatter(content: str) -> Dict[str, Any]:
    """
    Parse the YAML front matter of a rendered note.

    Raises:
        ValueError: The note has no front matter or it is not valid YAML
    """
    if not content.startswith('---'):
        raise ValueError("Note has no frontmatter")

    # Delimiters are whole lines, values may contain '---'
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        raise ValueError("Note frontmatter is not closed")

    try:
        frontmatter = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid frontmatter: {e}") from e
    return frontmatter or {}


def write_note(adapter: VaultAdapter, folder: str, variables: Dict[str, Any], template: str = DEFAULT_TEMPLATE) -> str:
    """
    Render the note and create ``<folder>/<fileName>.md``.

    Returns:
        Vault path of the new note

    Raises:
        FileExistsError: A note with that name already exists
        ValueError: The rendered front matter is not valid YAML
    """
    content = render_note(variables, template)
    parse_frontmatter(content)

    folder = normalize_path(folder)
    prefix = '' if folder == '/' else f"{folder}/"
    filepath = normalize_path(f"{prefix}{variables['fileName']}.md")
    if adapter.exists(filepath):
        raise FileExistsError(f"Note already exists: {filepath}")

    if prefix and not adapter.exists(folder):
        adapter.mkdir(folder)
    adapter.write(filepath, content)
    return filepath
