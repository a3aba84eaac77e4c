"""
Google Slides MCP Server.
Provides MCP tools for Google Slides operations via OAuth2.
"""

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pydantic
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from slides_mcp.services import ServiceBundle
from slides_mcp.tools.registry import ToolRegistry, list_tool_definitions
from slides_mcp.utils.config_loader import AppConfig, get_config
from slides_mcp.utils.exceptions import ErrorKind, SlidesToolError
from slides_mcp.utils.google_auth import build_services, run_oauth_flow
from slides_mcp.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def _error_payload(kind: ErrorKind, message: str) -> Dict[str, Any]:
    return {"error": kind.value, "message": message}


class GoogleSlidesMCPServer:
    """MCP Server for Google Slides operations."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        services: Optional[ServiceBundle] = None
    ):
        """
        Initialize Google Slides MCP Server.

        Args:
            config: Application config (uses global config if None)
            services: Prebuilt API adapters; built from the OAuth token on first use if None
        """
        self.config = config or get_config()
        self._services = services
        self._registry: Optional[ToolRegistry] = None
        self.server = Server("google-slides-mcp")
        self._setup_tools()

    def _get_registry(self) -> ToolRegistry:
        """Get or create the tool registry (and the Google API services behind it)."""
        if self._registry is None:
            if self._services is None:
                self._services = build_services(self.config)
            self._registry = ToolRegistry(self._services, self.config)
        return self._registry

    def list_tool_specs(self) -> List[Tool]:
        return [
            Tool(
                name=definition["name"],
                description=definition["description"],
                inputSchema=definition["input_schema"],
            )
            for definition in list_tool_definitions()
        ]

    def execute_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Run a tool and return its JSON-ready result or structured error.
        """
        try:
            tool = self._get_registry().get_tool(name)
            if tool is None:
                return _error_payload(ErrorKind.INVALID_ARGUMENTS, f"Unknown tool: {name}")
            output = tool.invoke(arguments or {})
            return output.model_dump(exclude_none=True)

        except pydantic.ValidationError as e:
            return _error_payload(ErrorKind.INVALID_ARGUMENTS, str(e))
        except SlidesToolError as e:
            log = logger.warning if e.kind != ErrorKind.SERVICE_ERROR else logger.error
            log(
                f"Tool {name} failed: {e.message}",
                extra={"extra_data": {"tool": name, "error_code": e.error_code}}
            )
            return e.to_dict()
        except Exception as e:
            logger.exception(f"Error executing tool {name}: {e}")
            return _error_payload(ErrorKind.SERVICE_ERROR, str(e))

    def _setup_tools(self):
        """Register MCP tools."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            """List available tools."""
            return self.list_tool_specs()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            """Handle tool calls."""
            result = self.execute_tool(name, arguments)
            return [TextContent(type="text", text=json.dumps(result, indent=2, ensure_ascii=False))]

    async def run(self):
        """Run the MCP server."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the MCP server."""
    parser = argparse.ArgumentParser(description="Google Slides MCP Server")
    parser.add_argument(
        "--token-path",
        type=str,
        default=None,
        help="Path to OAuth token file (overrides GOOGLE_TOKEN_PATH)"
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the MCP server over stdio (default)")
    authorize = subparsers.add_parser("authorize", help="Run the OAuth consent flow and store the token")
    authorize.add_argument(
        "--client-secrets",
        type=str,
        required=True,
        help="Path to the OAuth client secrets JSON"
    )
    args = parser.parse_args(argv)

    config = get_config()
    if args.token_path:
        config = config.model_copy(update={"token_path": Path(args.token_path)})

    setup_logging(config.log_level, config.log_dir, config.enable_file_logging)

    if args.command == "authorize":
        run_oauth_flow(Path(args.client_secrets), config.token_path)
        return

    server = GoogleSlidesMCPServer(config=config)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
