"""Look up video games on IGDB and build Obsidian game notes."""

import asyncio


def main():
    """Main entry point for the MCP server."""
    from . import server
    asyncio.run(server.main())


__all__ = ['main']
