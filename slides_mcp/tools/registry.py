"""
Central registry for the Slides tools.
Provides tool discovery, categorization, and metadata.
"""

import inspect
from enum import Enum
from typing import Any, Dict, List, Optional

from slides_mcp.services import ServiceBundle
from slides_mcp.tools.base import SlidesTool
from slides_mcp.tools.comments import ListCommentsTool
from slides_mcp.tools.images import AddImageTool, ModifyImageTool, ReplaceImageTool
from slides_mcp.tools.objects import DeleteObjectTool
from slides_mcp.tools.presentations import CopyPresentationTool, CreatePresentationTool, ExportPDFTool
from slides_mcp.tools.search import SearchTextTool
from slides_mcp.tools.transitions import SetTransitionTool
from slides_mcp.tools.translate import TranslatePresentationTool
from slides_mcp.tools.videos import ModifyVideoTool
from slides_mcp.utils.config_loader import AppConfig


class ToolCategory(Enum):
    """Tool categories."""
    PRESENTATION = "presentation"
    MEDIA = "media"
    OBJECTS = "objects"
    TEXT = "text"
    COLLABORATION = "collaboration"


TOOL_CLASSES = [
    (CreatePresentationTool, ToolCategory.PRESENTATION),
    (CopyPresentationTool, ToolCategory.PRESENTATION),
    (ExportPDFTool, ToolCategory.PRESENTATION),
    (SetTransitionTool, ToolCategory.PRESENTATION),
    (AddImageTool, ToolCategory.MEDIA),
    (ReplaceImageTool, ToolCategory.MEDIA),
    (ModifyImageTool, ToolCategory.MEDIA),
    (ModifyVideoTool, ToolCategory.MEDIA),
    (DeleteObjectTool, ToolCategory.OBJECTS),
    (SearchTextTool, ToolCategory.TEXT),
    (TranslatePresentationTool, ToolCategory.TEXT),
    (ListCommentsTool, ToolCategory.COLLABORATION),
]


def describe_tool(tool_class, category: ToolCategory) -> Dict[str, Any]:
    """Metadata for a tool class; needs no credentials."""
    return {
        "name": tool_class.name,
        "description": inspect.cleandoc(tool_class.description),
        "category": category.value,
        "input_schema": tool_class.args_schema.model_json_schema(),
    }


def list_tool_definitions() -> List[Dict[str, Any]]:
    return [describe_tool(tool_class, category) for tool_class, category in TOOL_CLASSES]


class ToolRegistry:
    """
    Registry of all available tools, bound to one set of services.
    """

    def __init__(self, services: ServiceBundle, config: Optional[AppConfig] = None):
        """
        Initialize tool registry.

        Args:
            services: Google API adapters shared by every tool
            config: Application config (uses global config if None)
        """
        self.tools: Dict[str, SlidesTool] = {}
        self.tool_metadata: Dict[str, Dict[str, Any]] = {}
        for tool_class, category in TOOL_CLASSES:
            self.register_tool(tool_class(services, config), category)

    def register_tool(self, tool: SlidesTool, category: ToolCategory) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool instance
            category: Tool category
        """
        self.tools[tool.name] = tool
        self.tool_metadata[tool.name] = describe_tool(type(tool), category)

    def get_tool(self, tool_name: str) -> Optional[SlidesTool]:
        return self.tools.get(tool_name)

    def get_tools_by_category(self, category: ToolCategory) -> List[SlidesTool]:
        return [
            tool for name, tool in self.tools.items()
            if self.tool_metadata[name]["category"] == category.value
        ]

    def get_all_tools(self) -> List[SlidesTool]:
        return list(self.tools.values())

    def list_tools(self) -> List[Dict[str, Any]]:
        """
        List all tools with their metadata.

        Returns:
            List of tool metadata dictionaries
        """
        return list(self.tool_metadata.values())
