"""
MCP Tool Handlers for Content Management

- GameToolHandler: IGDB game search and QuickAdd game notes

Handlers need IGDB credentials, from Keys/api_keys.json or the environment.
"""

from .game_tools import GameToolHandler, ToolHost

__all__ = [
    'GameToolHandler',
    'ToolHost',
]
