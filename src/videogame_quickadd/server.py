import logging
from collections.abc import Sequence
from typing import Any, Dict
from dotenv import load_dotenv
from mcp.server import Server
from mcp.types import (
    Tool,
    TextContent,
    ImageContent,
    EmbeddedResource,
)

load_dotenv()

from . import tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("videogame-quickadd")

app = Server("videogame-quickadd")


def load_tool_handlers() -> Dict[str, tools.ToolHandler]:
    """Game tools, keyed by tool name. Empty when IGDB credentials are missing."""
    from .content_tools import GameToolHandler

    try:
        game_handler = GameToolHandler()
    except (FileNotFoundError, KeyError, ValueError, RuntimeError) as e:
        logger.warning(f"⚠️  Game tools not available: {e}")
        logger.info("ℹ️  Set up Keys/api_keys.json or IGDB_CLIENT_ID / IGDB_CLIENT_SECRET to enable them")
        return {}

    handlers = {handler.name: handler for handler in tools.bind_tool_handlers(game_handler)}
    logger.info(f"✅ Loaded {len(handlers)} game tools")
    return handlers


tool_handlers = load_tool_handlers()


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [handler.get_tool_description() for handler in tool_handlers.values()]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> Sequence[TextContent | ImageContent | EmbeddedResource]:
    """Dispatch a tool call to its handler."""
    if not isinstance(arguments, dict):
        raise RuntimeError("arguments must be dictionary")

    handler = tool_handlers.get(name)
    if handler is None:
        raise ValueError(f"Unknown tool: {name}")

    try:
        return handler.run_tool(arguments)
    except Exception as e:
        logger.error(f"Tool {name} failed: {e}")
        raise RuntimeError(f"Caught Exception. Error: {str(e)}") from e


async def main():
    # Import here to avoid issues with event loops
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )
