"""
Image tools: add, replace and modify images on slides.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from pydantic import Field

from slides_mcp.core.detectors import decode_image_data
from slides_mcp.core.document import ImageElement
from slides_mcp.core.request_builders import (
    build_create_image_request,
    build_replace_image_requests,
    build_transform_update_request,
    build_update_image_properties_request,
    drive_image_url,
    generate_object_id,
    image_property_updates,
)
from slides_mcp.core.tree_walker import find_element_in_slides, find_slide
from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.tools.models import CropInput, PositionInput, SizeInput
from slides_mcp.utils.exceptions import (
    ErrorKind,
    NotFoundError,
    OperationError,
    ValidationError,
)
from slides_mcp.utils.validators import (
    validate_crop,
    validate_position,
    validate_presentation_id,
    validate_range,
    validate_recolor,
    validate_required,
    validate_size,
    validate_slide_reference,
)


def _image_file_name() -> str:
    return f"slides_image_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S_%f')}"


class ImageUploadTool(SlidesTool):
    """Base for the tools that put new image bytes on a slide."""

    def upload_image(self, data: bytes, mime_type: str) -> Tuple[str, List[str]]:
        """
        Upload image bytes to Drive and try to make them publicly readable.

        Slides fetches the image by URL, so a private file may not render. Sharing
        failures are reported as warnings, not errors.

        Returns:
            (Drive file ID, warnings)

        Raises:
            OperationError: UPLOAD_FAILED
        """
        try:
            uploaded = self.services.drive.upload_file(_image_file_name(), mime_type, data)
        except Exception as e:
            raise OperationError(f"failed to upload image to Drive: {e}", kind=ErrorKind.UPLOAD_FAILED) from e

        file_id = uploaded.get("id", "")
        warnings = []
        try:
            self.services.drive.make_file_public(file_id)
        except Exception as e:
            self.log_warning("Failed to make image public, image may not display", file_id=file_id, error=str(e))
            warnings.append(f"could not make uploaded image public: {e}")
        return file_id, warnings


# ============================================================================
# add_image
# ============================================================================

class AddImageInput(ToolInput):
    """Input schema for add_image tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    slide_index: Optional[int] = Field(default=None, description="1-based slide index")
    slide_id: Optional[str] = Field(default=None, description="Slide object ID (alternative to slide_index)")
    image_base64: str = Field(description="Base64-encoded PNG, JPEG, GIF, WebP or BMP data")
    position: Optional[PositionInput] = Field(default=None, description="Position in points")
    size: Optional[SizeInput] = Field(default=None, description="Size in points")


class AddImageOutput(ToolOutput):
    object_id: str
    slide_id: str
    slide_index: int
    drive_file_id: str
    warnings: List[str] = Field(default_factory=list)


class AddImageTool(ImageUploadTool):
    """Tool for adding an image to a slide."""

    name = "add_image"
    description = """
    Add an image to a slide. The image is uploaded to Drive and inserted by URL.

    Input:
    - presentation_id: Presentation ID or URL
    - slide_index (1-based) or slide_id: Target slide
    - image_base64: Image bytes, base64-encoded
    - position: Optional {x, y} in points
    - size: Optional {width, height} in points; give one to keep the aspect ratio
    """
    args_schema = AddImageInput

    def run(self, tool_input: AddImageInput) -> AddImageOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        slide_index, slide_id = validate_slide_reference(tool_input.slide_index, tool_input.slide_id)

        position = None
        if tool_input.position is not None:
            position = validate_position(tool_input.position.x, tool_input.position.y)
        width = height = None
        if tool_input.size is not None:
            width, height = validate_size(tool_input.size.width, tool_input.size.height)

        data, mime_type = decode_image_data(tool_input.image_base64)

        self.log_info(
            "Adding image to slide",
            presentation_id=presentation_id,
            slide_index=slide_index,
            slide_id=slide_id,
            image_bytes=len(data),
        )

        document = self.fetch_document(presentation_id)
        target_slide_id, target_index = find_slide(document, slide_index, slide_id)

        file_id, warnings = self.upload_image(data, mime_type)

        object_id = generate_object_id("img", presentation_id, target_slide_id)
        request = build_create_image_request(
            object_id,
            target_slide_id,
            drive_image_url(file_id),
            position=position,
            width=width,
            height=height,
        )
        self.submit_batch(presentation_id, [request], ErrorKind.ADD_IMAGE_FAILED)

        self.log_info(
            "Image added successfully",
            presentation_id=presentation_id,
            object_id=object_id,
            drive_file_id=file_id,
        )
        return AddImageOutput(
            object_id=object_id,
            slide_id=target_slide_id,
            slide_index=target_index,
            drive_file_id=file_id,
            warnings=warnings,
        )


# ============================================================================
# replace_image
# ============================================================================

class ReplaceImageInput(ToolInput):
    """Input schema for replace_image tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    object_id: str = Field(description="Object ID of the image to replace")
    image_base64: str = Field(description="Base64-encoded replacement image")
    preserve_size: bool = Field(default=True, description="Keep the current image's size")


class ReplaceImageOutput(ToolOutput):
    object_id: str
    new_object_id: str
    preserved_size: bool
    warnings: List[str] = Field(default_factory=list)


class ReplaceImageTool(ImageUploadTool):
    """Tool for replacing an image while keeping its placement."""

    name = "replace_image"
    description = """
    Replace an existing image with new image data. The old image is deleted and a
    new one is created at the same position (and, by default, size). The new
    image gets a new object ID, which is returned.

    Input:
    - presentation_id: Presentation ID or URL
    - object_id: Image to replace
    - image_base64: Replacement image, base64-encoded
    - preserve_size: Keep the current size (default true)
    """
    args_schema = ReplaceImageInput

    def run(self, tool_input: ReplaceImageInput) -> ReplaceImageOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        object_id = validate_required(tool_input.object_id, "object_id", ErrorKind.INVALID_OBJECT_ID)
        data, mime_type = decode_image_data(tool_input.image_base64)

        self.log_info(
            "Replacing image",
            presentation_id=presentation_id,
            object_id=object_id,
            preserve_size=tool_input.preserve_size,
        )

        document = self.fetch_document(presentation_id)
        element, slide = find_element_in_slides(document, object_id)
        if element is None:
            raise NotFoundError(f"object '{object_id}' not found in presentation")
        if not isinstance(element, ImageElement):
            raise ValidationError(
                f"object '{object_id}' is not an image (type: {element.object_type})",
                kind=ErrorKind.NOT_AN_IMAGE,
                field="object_id",
                value=object_id
            )

        file_id, warnings = self.upload_image(data, mime_type)

        new_object_id = generate_object_id("img", presentation_id, slide.object_id)
        requests = build_replace_image_requests(
            element,
            slide.object_id,
            new_object_id,
            drive_image_url(file_id),
            preserve_size=tool_input.preserve_size,
        )
        self.submit_batch(presentation_id, requests, ErrorKind.REPLACE_IMAGE_FAILED)

        self.log_info(
            "Image replaced successfully",
            presentation_id=presentation_id,
            old_object_id=object_id,
            new_object_id=new_object_id,
        )
        return ReplaceImageOutput(
            object_id=object_id,
            new_object_id=new_object_id,
            preserved_size=tool_input.preserve_size,
            warnings=warnings,
        )


# ============================================================================
# modify_image
# ============================================================================

class ImageModifyProperties(ToolInput):
    position: Optional[PositionInput] = Field(default=None, description="New position in points")
    size: Optional[SizeInput] = Field(default=None, description="New size in points")
    crop: Optional[CropInput] = Field(default=None, description="Crop offsets (0-1)")
    brightness: Optional[float] = Field(default=None, description="Brightness, -1 to 1")
    contrast: Optional[float] = Field(default=None, description="Contrast, -1 to 1")
    transparency: Optional[float] = Field(default=None, description="Transparency, 0 to 1")
    recolor: Optional[str] = Field(
        default=None,
        description="Recolor preset (LIGHT1-10, DARK1-10, GRAYSCALE, NEGATIVE, SEPIA) or 'none' to remove"
    )

    def has_changes(self) -> bool:
        return (
            self.position is not None
            or self.size is not None
            or (self.crop is not None and not self.crop.is_empty())
            or self.brightness is not None
            or self.contrast is not None
            or self.transparency is not None
            or self.recolor is not None
        )


class ModifyImageInput(ToolInput):
    """Input schema for modify_image tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    object_id: str = Field(description="Object ID of the image")
    properties: Optional[ImageModifyProperties] = Field(default=None, description="Properties to change")


class ModifyImageOutput(ToolOutput):
    object_id: str
    modified_properties: List[str]


class ModifyImageTool(SlidesTool):
    """Tool for changing an image's placement and appearance."""

    name = "modify_image"
    description = """
    Modify an image: position, size, crop, brightness, contrast, transparency or
    recolor. Only the given properties change.

    Input:
    - presentation_id: Presentation ID or URL
    - object_id: Image to modify
    - properties: {position, size, crop, brightness, contrast, transparency, recolor}
    """
    args_schema = ModifyImageInput

    def _validate(self, props: Optional[ImageModifyProperties]) -> ImageModifyProperties:
        if props is None or not props.has_changes():
            raise ValidationError(
                "no image properties to modify",
                kind=ErrorKind.NO_PROPERTIES_TO_MODIFY,
                field="properties"
            )
        if props.crop is not None:
            validate_crop(props.crop.edges())
        validate_range(props.brightness, -1.0, 1.0, "brightness", ErrorKind.INVALID_BRIGHTNESS)
        validate_range(props.contrast, -1.0, 1.0, "contrast", ErrorKind.INVALID_CONTRAST)
        validate_range(props.transparency, 0.0, 1.0, "transparency", ErrorKind.INVALID_TRANSPARENCY)
        if props.size is not None:
            validate_size(props.size.width, props.size.height)
        if props.position is not None:
            validate_position(props.position.x, props.position.y)
        validate_recolor(props.recolor)
        return props

    def run(self, tool_input: ModifyImageInput) -> ModifyImageOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        object_id = validate_required(tool_input.object_id, "object_id", ErrorKind.INVALID_OBJECT_ID)
        props = self._validate(tool_input.properties)

        self.log_info("Modifying image properties", presentation_id=presentation_id, object_id=object_id)

        document = self.fetch_document(presentation_id)
        element, _ = find_element_in_slides(document, object_id)
        if element is None:
            raise NotFoundError(f"object '{object_id}' not found in presentation")
        if not isinstance(element, ImageElement):
            raise ValidationError(
                f"object '{object_id}' is not an image (type: {element.object_type})",
                kind=ErrorKind.NOT_AN_IMAGE,
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

        updates, property_names = image_property_updates(
            crop=props.crop.edges() if props.crop else None,
            brightness=props.brightness,
            contrast=props.contrast,
            transparency=props.transparency,
            recolor=props.recolor,
        )
        if updates:
            requests.append(build_update_image_properties_request(object_id, updates))
            modified.extend(property_names)

        self.submit_batch(presentation_id, requests, ErrorKind.MODIFY_IMAGE_FAILED)

        self.log_info(
            "Image modified successfully",
            presentation_id=presentation_id,
            object_id=object_id,
            properties_modified=len(modified),
        )
        return ModifyImageOutput(object_id=object_id, modified_properties=modified)
