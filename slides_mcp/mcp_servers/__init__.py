"""
MCP servers.

Available servers:
- google_slides_server: Google Slides, Drive and Translate operations via OAuth2
"""

from .google_slides_server import GoogleSlidesMCPServer

__all__ = [
    "GoogleSlidesMCPServer",
]
