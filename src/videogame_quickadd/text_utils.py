"""
Text utilities for file names and quoted front matter values.

Characters stripped from file names: \\ , # % & { } / * < > $ " : @ . | ^ [ ]
"""

import re


ILLEGAL_FILENAME_CHARS = re.compile(r'[\\,#%&{}/*<>$":@.|^\[\]]')
NEWLINES = re.compile(r'\r?\n|\r')


def sanitize_filename(value: str) -> str:
    """
    Remove characters that are unsafe in vault file names and wiki links.

    Args:
        value: Raw string (game title, developer name, path segment...)

    Returns:
        The string without any of the illegal characters

    Examples:
        >>> sanitize_filename("Super Mario Bros. 3")
        'Super Mario Bros 3'
        >>> sanitize_filename("Ratchet & Clank: Rift Apart")
        'Ratchet  Clank Rift Apart'
    """
    return ILLEGAL_FILENAME_CHARS.sub('', value)


def escape_single_quoted(value: str) -> str:
    """Double single quotes so the value fits in a single-quoted YAML scalar."""
    return value.replace("'", "''")


def collapse_newlines(value: str) -> str:
    return NEWLINES.sub(' ', value)
