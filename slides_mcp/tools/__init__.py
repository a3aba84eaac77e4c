"""
Slides tools. Each tool validates its input, reads the presentation when needed,
submits one atomic batch and returns a pydantic output model.
"""

from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.tools.registry import ToolCategory, ToolRegistry, list_tool_definitions

__all__ = ["SlidesTool", "ToolInput", "ToolOutput", "ToolCategory", "ToolRegistry", "list_tool_definitions"]
