"""
Video tools.
"""

from typing import List, Optional

from pydantic import Field

from slides_mcp.core.document import VideoElement
from slides_mcp.core.request_builders import (
    build_transform_update_request,
    build_update_video_properties_request,
    video_property_updates,
)
from slides_mcp.core.tree_walker import find_element_in_slides
from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.tools.models import PositionInput, SizeInput
from slides_mcp.utils.exceptions import ErrorKind, NotFoundError, ValidationError
from slides_mcp.utils.validators import (
    validate_position,
    validate_presentation_id,
    validate_required,
    validate_size,
    validate_video_times,
)


class VideoModifyProperties(ToolInput):
    position: Optional[PositionInput] = Field(default=None, description="New position in points")
    size: Optional[SizeInput] = Field(default=None, description="New size in points")
    start_time: Optional[float] = Field(default=None, description="Playback start, in seconds")
    end_time: Optional[float] = Field(default=None, description="Playback end, in seconds")
    autoplay: Optional[bool] = Field(default=None, description="Play automatically when presenting")
    mute: Optional[bool] = Field(default=None, description="Mute audio")

    def has_changes(self) -> bool:
        return any(
            value is not None
            for value in (self.position, self.size, self.start_time, self.end_time, self.autoplay, self.mute)
        )


class ModifyVideoInput(ToolInput):
    """Input schema for modify_video tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    object_id: str = Field(description="Object ID of the video")
    properties: Optional[VideoModifyProperties] = Field(default=None, description="Properties to change")


class ModifyVideoOutput(ToolOutput):
    object_id: str
    modified_properties: List[str]


class ModifyVideoTool(SlidesTool):
    """Tool for changing a video's placement and playback settings."""

    name = "modify_video"
    description = """
    Modify a video: position, size, start/end time (seconds), autoplay or mute.

    Input:
    - presentation_id: Presentation ID or URL
    - object_id: Video to modify
    - properties: {position, size, start_time, end_time, autoplay, mute}
    """
    args_schema = ModifyVideoInput

    def run(self, tool_input: ModifyVideoInput) -> ModifyVideoOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        object_id = validate_required(tool_input.object_id, "object_id", ErrorKind.INVALID_OBJECT_ID)

        props = tool_input.properties
        if props is None or not props.has_changes():
            raise ValidationError(
                "no video properties to modify",
                kind=ErrorKind.NO_PROPERTIES_TO_MODIFY,
                field="properties"
            )
        validate_video_times(props.start_time, props.end_time)
        if props.size is not None:
            validate_size(props.size.width, props.size.height)
        if props.position is not None:
            validate_position(props.position.x, props.position.y)

        self.log_info("Modifying video properties", presentation_id=presentation_id, object_id=object_id)

        document = self.fetch_document(presentation_id)
        element, _ = find_element_in_slides(document, object_id)
        if element is None:
            raise NotFoundError(f"object '{object_id}' not found in presentation")
        if not isinstance(element, VideoElement):
            raise ValidationError(
                f"object '{object_id}' is not a video (type: {element.object_type})",
                kind=ErrorKind.NOT_A_VIDEO,
                field="object_id",
                value=object_id
            )

        requests = []
        modified: List[str] = []

        if props.position is not None or props.size is not None:
            requests.append(build_transform_update_request(
                element,
                position=(props.position.x, props.position.y) if props.position else None,
                width=props.size.width if props.size else None,
                height=props.size.height if props.size else None,
            ))
            if props.position is not None:
                modified.append("position")
            if props.size is not None:
                modified.append("size")

        updates, property_names = video_property_updates(
            start_time=props.start_time,
            end_time=props.end_time,
            autoplay=props.autoplay,
            mute=props.mute,
        )
        if updates:
            requests.append(build_update_video_properties_request(object_id, updates))
            modified.extend(property_names)

        self.submit_batch(presentation_id, requests, ErrorKind.MODIFY_VIDEO_FAILED)

        self.log_info(
            "Video modified successfully",
            presentation_id=presentation_id,
            object_id=object_id,
            properties_modified=len(modified),
        )
        return ModifyVideoOutput(object_id=object_id, modified_properties=modified)
