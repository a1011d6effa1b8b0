from ygocli.mcp.tools import TOOL_DEFINITIONS, ToolDefinition, execute_tool

__all__ = ["TOOL_DEFINITIONS", "ToolDefinition", "execute_tool"]
