#!/usr/bin/env python3
"""
Interactive QuickAdd session in the terminal.

Usage:
    videogame-quickadd                       # Print the note variables as JSON
    videogame-quickadd --write               # Create the game note in the vault
    videogame-quickadd --seed "Quake"        # Pre-fill the title prompt
    videogame-quickadd --vault ~/Notes       # Vault root (default: OBSIDIAN_VAULT_PATH or cwd)
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any, List, Optional

from dotenv import load_dotenv

from .key_manager import KeyManager
from .session import Host, SessionAborted, SessionContext, run_session
from .templates import write_note

logger = logging.getLogger("videogame-quickadd")


class ConsoleHost(Host):
    """Prompts on stdin, notifications on stderr"""

    def __init__(self, clipboard: str = ''):
        self.clipboard = clipboard

    def prompt(self, header: str, placeholder: str = '', value: str = '') -> Optional[str]:
        hint = f" [{value}]" if value else f" ({placeholder})" if placeholder else ''
        try:
            answer = input(f"{header}{hint} ").strip()
        except EOFError:
            return None
        return answer or value

    def suggest(self, display_items: List[str], items: List[Any]) -> Optional[Any]:
        for i, item in enumerate(display_items, 1):
            print(f"{i:2d}. {item}")
        try:
            answer = input("Select a game (number, empty to cancel): ").strip()
        except EOFError:
            return None
        if not answer.isdigit() or not 1 <= int(answer) <= len(items):
            return None
        return items[int(answer) - 1]

    def notify(self, message: str):
        print(message, file=sys.stderr)

    def get_clipboard(self) -> str:
        return self.clipboard


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Add a video game to an Obsidian vault from IGDB")
    parser.add_argument("--vault", help="Vault root directory")
    parser.add_argument("--seed", default="", help="Text used to pre-fill the title prompt")
    parser.add_argument("--write", action="store_true", help="Create the game note instead of printing variables")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format='%(levelname)s - %(message)s')
    args = parse_args(argv)

    key_manager = KeyManager(args.vault)
    try:
        settings = key_manager.get_quickadd_settings()
    except (FileNotFoundError, KeyError, ValueError, RuntimeError) as e:
        logger.error(f"❌ IGDB credentials not available: {e}")
        return 1
    if args.seed:
        settings = replace(settings, use_clipboard=True)

    context = SessionContext.create(ConsoleHost(clipboard=args.seed), settings, key_manager.vault_path)

    try:
        variables = run_session(context)
    except SessionAborted as e:
        logger.error(f"❌ {e}")
        return 1

    if args.write:
        try:
            filepath = write_note(context.adapter, key_manager.get_notes_folder(), variables)
        except (FileExistsError, ValueError, OSError) as e:
            logger.error(f"❌ Error adding game: {e}")
            return 1
        print(f"✅ Created game file: {filepath}")
    else:
        printable = {key: value for key, value in variables.items() if key != 'original'}
        print(json.dumps(printable, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
