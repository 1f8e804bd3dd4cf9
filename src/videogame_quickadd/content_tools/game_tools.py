"""
Game Tools - MCP tools for IGDB game lookup and note creation
"""

import json
import logging
from functools import partial
from typing import Dict, Any, List, Optional

from mcp.types import Tool, TextContent

from ..clients import TokenRequestError
from ..formatters import EMPTY, release_date_string, suggestion_title
from ..key_manager import KeyManager
from ..pipeline import QueryFailedError, execute_query, read_or_refresh_token, refresh_token
from ..session import Host, SessionAborted, SessionContext, run_session
from ..templates import write_note
from ..tools import ToolResult

logger = logging.getLogger(__name__)


class ToolHost(Host):
    """Session host whose answers come from the tool arguments"""

    def __init__(self, query: str, choice: Optional[int] = 0):
        self.query = query
        self.choice = choice
        self.notifications: List[str] = []

    def prompt(self, header: str, placeholder: str = '', value: str = '') -> Optional[str]:
        return self.query

    def suggest(self, display_items: List[str], items: List[Any]) -> Optional[Any]:
        if self.choice is None or not 0 <= self.choice < len(items):
            return None
        logger.info(f"Selected: {display_items[self.choice]}")
        return items[self.choice]

    def notify(self, message: str):
        logger.info(message)
        self.notifications.append(message)


class GameToolHandler:
    """Handler for game-related MCP tools"""

    def __init__(self, key_manager: Optional[KeyManager] = None):
        self.name = "obsidian_videogame_tools"
        self._key_manager = key_manager or KeyManager()
        self.settings = self._key_manager.get_quickadd_settings()
        self.vault_path = self._key_manager.vault_path

    def get_tool_descriptions(self) -> List[Tool]:
        """Return all game-related tool descriptions"""
        return [
            Tool(
                name="obsidian_search_videogames",
                description="Search IGDB for video games by title. Returns id, name, a one-line summary (name, year, platforms) and release date for each match.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Game title to search for"
                        },
                        "limit": {
                            "type": "integer",
                            "description": "Maximum number of results to return (default: 15)",
                            "default": 15,
                            "minimum": 1,
                            "maximum": 50
                        }
                    },
                    "required": ["query"]
                }
            ),
            Tool(
                name="obsidian_quick_add_videogame",
                description="Look up a game on IGDB, download its cover art into the vault and build the note variables (front matter values, wiki links, poster embed). Optionally creates the game note.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Game title to search for"
                        },
                        "choice": {
                            "type": "integer",
                            "description": "Index of the search result to use (default: 0, the first match)",
                            "default": 0,
                            "minimum": 0
                        },
                        "write_note": {
                            "type": "boolean",
                            "description": "Create the game note in the notes folder (default: false)",
                            "default": False
                        }
                    },
                    "required": ["query"]
                }
            )
        ]

    def run_tool(self, tool_name: str, arguments: Dict[str, Any]) -> ToolResult:
        """Execute a game tool"""
        if tool_name == "obsidian_search_videogames":
            return self._search_games(arguments)
        elif tool_name == "obsidian_quick_add_videogame":
            return self._quick_add_game(arguments)
        else:
            raise ValueError(f"Unknown tool: {tool_name}")

    def _context(self, host: Host) -> SessionContext:
        return SessionContext.create(host, self.settings, self.vault_path)

    def _search_games(self, args: Dict[str, Any]) -> ToolResult:
        """Search for games"""
        query = args["query"].strip()
        limit = args.get("limit", 15)
        if not query:
            return [
                TextContent(
                    type="text",
                    text=json.dumps({'error': "No query entered.", 'results': []}, indent=2)
                )
            ]

        context = self._context(ToolHost(query))
        credentials = self.settings.credentials
        try:
            token = read_or_refresh_token(context.token_cache, context.auth_client, credentials)
            results = execute_query(
                context.igdb_client,
                query,
                token,
                partial(refresh_token, context.token_cache, context.auth_client, credentials),
                limit,
            )
        except (TokenRequestError, QueryFailedError) as e:
            return [
                TextContent(
                    type="text",
                    text=json.dumps({
                        'error': f"Search failed: {str(e)}",
                        'results': []
                    }, indent=2)
                )
            ]

        formatted_results = []
        for game in results:
            release_date = release_date_string(game.get('first_release_date'))
            formatted_results.append({
                'id': game.get('id'),
                'name': game.get('name'),
                'suggestion': suggestion_title(game),
                'release_date': release_date if release_date is not EMPTY else 'Unknown',
            })

        return [
            TextContent(
                type="text",
                text=json.dumps({
                    'source': 'IGDB',
                    'count': len(formatted_results),
                    'results': formatted_results
                }, indent=2)
            )
        ]

    def _quick_add_game(self, args: Dict[str, Any]) -> ToolResult:
        """Build note variables for a game and optionally create the note"""
        host = ToolHost(args["query"], args.get("choice", 0))
        context = self._context(host)

        try:
            variables = run_session(context)
        except SessionAborted as e:
            return [TextContent(type="text", text=f"❌ {str(e)}")]

        result = {key: value for key, value in variables.items() if key != 'original'}

        if args.get("write_note", False):
            try:
                result['note'] = write_note(context.adapter, self._key_manager.get_notes_folder(), variables)
            except (FileExistsError, ValueError, OSError) as e:
                return [TextContent(type="text", text=f"❌ Error adding game: {str(e)}")]

        return [
            TextContent(
                type="text",
                text=json.dumps(result, indent=2, ensure_ascii=False)
            )
        ]
