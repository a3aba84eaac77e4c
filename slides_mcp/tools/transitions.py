"""
Slide transitions.

The Slides API has no way to set transitions: SlideProperties only carries
isSkipped, layoutObjectId, masterObjectId and notesPage. The tool still validates
its input so callers get precise errors, then reports the capability gap.
"""

from typing import Optional

from pydantic import Field

from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.utils.exceptions import ErrorKind, OperationError
from slides_mcp.utils.validators import (
    validate_presentation_id,
    validate_slide_reference,
    validate_transition_duration,
    validate_transition_type,
)


class SetTransitionInput(ToolInput):
    """Input schema for set_transition tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    slide_index: Optional[int] = Field(default=None, description="1-based slide index (omit for all slides)")
    slide_id: Optional[str] = Field(default=None, description="Slide ID (alternative to slide_index)")
    transition_type: str = Field(
        description="NONE, FADE, SLIDE_FROM_RIGHT, SLIDE_FROM_LEFT, SLIDE_FROM_TOP, "
                    "SLIDE_FROM_BOTTOM, FLIP, CUBE, GALLERY, ZOOM or DISSOLVE"
    )
    duration: Optional[float] = Field(default=None, description="Duration in seconds (0-10)")


class SetTransitionTool(SlidesTool):
    """Tool for slide transitions (not supported by the Slides API)."""

    name = "set_transition"
    description = """
    Set a slide transition. The Google Slides API does not support transitions,
    so valid requests fail with TRANSITION_NOT_SUPPORTED; use the Slides UI
    (Slide > Transition) or Apps Script instead.

    Input:
    - presentation_id: Presentation ID or URL
    - slide_index or slide_id: Optional; all slides when omitted
    - transition_type: Transition name
    - duration: Optional seconds, 0-10
    """
    args_schema = SetTransitionInput

    def run(self, tool_input: SetTransitionInput) -> ToolOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        transition_type = validate_transition_type(tool_input.transition_type)
        validate_transition_duration(tool_input.duration)
        if tool_input.slide_index is not None or tool_input.slide_id:
            validate_slide_reference(tool_input.slide_index, tool_input.slide_id)

        self.log_info(
            "set_transition called",
            presentation_id=presentation_id,
            transition_type=transition_type,
        )

        raise OperationError(
            "the Google Slides API does not provide endpoints for setting slide transitions. "
            "Transitions can only be configured in the Slides UI (Slide > Transition) "
            "or with Google Apps Script",
            kind=ErrorKind.TRANSITION_NOT_SUPPORTED
        )
