"""
MCP tool handler base classes
"""

from collections.abc import Sequence
from typing import List

from mcp.types import (
    Tool,
    TextContent,
    ImageContent,
    EmbeddedResource,
)

ToolResult = Sequence[TextContent | ImageContent | EmbeddedResource]


class ToolHandler():
    def __init__(self, tool_name: str):
        self.name = tool_name

    def get_tool_description(self) -> Tool:
        raise NotImplementedError()

    def run_tool(self, args: dict) -> ToolResult:
        raise NotImplementedError()


class BoundToolHandler(ToolHandler):
    """One tool of a handler that serves several tools"""

    def __init__(self, tool_desc: Tool, parent_handler):
        super().__init__(tool_desc.name)
        self.tool_desc = tool_desc
        self.parent = parent_handler

    def get_tool_description(self) -> Tool:
        return self.tool_desc

    def run_tool(self, args: dict) -> ToolResult:
        return self.parent.run_tool(self.name, args)


def bind_tool_handlers(parent_handler) -> List[ToolHandler]:
    """Split a multi-tool handler into one ToolHandler per tool"""
    return [BoundToolHandler(desc, parent_handler) for desc in parent_handler.get_tool_descriptions()]
