"""
Input fragments shared by several tools.
"""

from typing import Dict, Optional

from pydantic import Field

from slides_mcp.tools.base import ToolInput


class PositionInput(ToolInput):
    """Top-left position in points."""

    x: float = Field(description="Distance from the left edge of the slide, in points")
    y: float = Field(description="Distance from the top edge of the slide, in points")


class SizeInput(ToolInput):
    """Size in points. Give one dimension to keep the aspect ratio."""

    width: Optional[float] = Field(default=None, description="Width in points")
    height: Optional[float] = Field(default=None, description="Height in points")


class CropInput(ToolInput):
    """Crop offsets as fractions (0-1) of the image, per edge."""

    top: Optional[float] = Field(default=None, description="Fraction cropped from the top")
    bottom: Optional[float] = Field(default=None, description="Fraction cropped from the bottom")
    left: Optional[float] = Field(default=None, description="Fraction cropped from the left")
    right: Optional[float] = Field(default=None, description="Fraction cropped from the right")

    def edges(self) -> Dict[str, Optional[float]]:
        return {"top": self.top, "bottom": self.bottom, "left": self.left, "right": self.right}

    def is_empty(self) -> bool:
        return all(value is None for value in self.edges().values())
