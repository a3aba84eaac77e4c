"""
Google Slides tools: request builders, validation and an MCP server exposing
image, video, object, presentation, search, translation and comment operations.
"""

__version__ = "0.1.0"
