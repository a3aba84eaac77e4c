"""
Presentation-level tools: create, copy and export to PDF.
"""

import base64
from contextlib import closing
from typing import List, Optional

from pydantic import Field

from slides_mcp.core.detectors import count_pdf_pages
from slides_mcp.core.request_builders import presentation_url
from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.utils.exceptions import (
    ErrorKind,
    NotFoundError,
    OperationError,
    classify_api_error,
    is_folder_not_found_error,
    is_parent_not_found_error,
)
from slides_mcp.utils.validators import (
    extract_presentation_id,
    validate_presentation_id,
    validate_required,
)

PDF_MIME_TYPE = "application/pdf"


# ============================================================================
# create_presentation
# ============================================================================

class CreatePresentationInput(ToolInput):
    """Input schema for create_presentation tool."""

    title: str = Field(description="Presentation title")
    folder_id: Optional[str] = Field(default=None, description="Drive folder to place the presentation in")


class CreatePresentationOutput(ToolOutput):
    presentation_id: str
    title: str
    url: str
    folder_id: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class CreatePresentationTool(SlidesTool):
    """Tool for creating a new, empty presentation."""

    name = "create_presentation"
    description = """
    Create a NEW EMPTY Google Slides presentation.

    Input:
    - title: Title of the presentation
    - folder_id: Optional Drive folder; if moving there fails the presentation
      is still created and a warning is returned
    """
    args_schema = CreatePresentationInput

    def run(self, tool_input: CreatePresentationInput) -> CreatePresentationOutput:
        title = validate_required(tool_input.title, "title", ErrorKind.INVALID_TITLE)
        folder_id = tool_input.folder_id.strip() if tool_input.folder_id else None

        self.log_info("Creating presentation", title=title, folder_id=folder_id)

        try:
            presentation = self.services.slides.create_presentation(title)
        except Exception as e:
            raise classify_api_error(e, failure_kind=ErrorKind.CREATE_FAILED) from e

        presentation_id = presentation.get("presentationId", "")
        warnings = []
        placed_in = None

        if folder_id:
            try:
                self.services.drive.move_file(presentation_id, folder_id)
                placed_in = folder_id
            except Exception as e:
                reason = "folder not found" if is_folder_not_found_error(e) else str(e)
                self.log_warning(
                    "Failed to move presentation to folder",
                    presentation_id=presentation_id,
                    folder_id=folder_id,
                    error=str(e),
                )
                warnings.append(f"presentation created but not moved to folder '{folder_id}': {reason}")

        self.log_info("Presentation created successfully", presentation_id=presentation_id)
        return CreatePresentationOutput(
            presentation_id=presentation_id,
            title=presentation.get("title", title),
            url=presentation_url(presentation_id),
            folder_id=placed_in,
            warnings=warnings,
        )


# ============================================================================
# copy_presentation
# ============================================================================

class CopyPresentationInput(ToolInput):
    """Input schema for copy_presentation tool."""

    source_id: str = Field(description="ID or URL of the presentation to copy")
    new_title: str = Field(description="Title of the copy")
    destination_folder_id: Optional[str] = Field(default=None, description="Drive folder for the copy")


class CopyPresentationOutput(ToolOutput):
    presentation_id: str
    title: str
    url: str
    source_id: str


class CopyPresentationTool(SlidesTool):
    """Tool for copying a presentation (useful for templates)."""

    name = "copy_presentation"
    description = """
    Copy an existing presentation, optionally into a specific Drive folder.

    Input:
    - source_id: Presentation to copy (ID or URL)
    - new_title: Title of the copy
    - destination_folder_id: Optional Drive folder for the copy
    """
    args_schema = CopyPresentationInput

    def run(self, tool_input: CopyPresentationInput) -> CopyPresentationOutput:
        source_id = extract_presentation_id(
            validate_required(tool_input.source_id, "source_id", ErrorKind.INVALID_SOURCE_ID)
        )
        new_title = validate_required(tool_input.new_title, "new_title", ErrorKind.INVALID_TITLE)
        folder_id = tool_input.destination_folder_id.strip() if tool_input.destination_folder_id else None

        self.log_info("Copying presentation", source_id=source_id, new_title=new_title, folder_id=folder_id)

        try:
            copied = self.services.drive.copy_file(source_id, new_title, parent_folder_id=folder_id)
        except Exception as e:
            # Parent errors can also read "not found", so they are checked first
            if folder_id and is_parent_not_found_error(e):
                raise NotFoundError(
                    f"destination folder '{folder_id}' is invalid: {e}",
                    kind=ErrorKind.FOLDER_NOT_FOUND
                ) from e
            raise classify_api_error(
                e,
                failure_kind=ErrorKind.COPY_FAILED,
                not_found_kind=ErrorKind.SOURCE_NOT_FOUND,
                context="failed to copy presentation"
            ) from e

        presentation_id = copied.get("id", "")
        self.log_info("Presentation copied successfully", source_id=source_id, presentation_id=presentation_id)
        return CopyPresentationOutput(
            presentation_id=presentation_id,
            title=copied.get("name", new_title),
            url=presentation_url(presentation_id),
            source_id=source_id,
        )


# ============================================================================
# export_pdf
# ============================================================================

class ExportPDFInput(ToolInput):
    """Input schema for export_pdf tool."""

    presentation_id: str = Field(description="Presentation ID or URL")


class ExportPDFOutput(ToolOutput):
    pdf_base64: str
    page_count: int
    file_size: int


class ExportPDFTool(SlidesTool):
    """Tool for exporting a presentation as PDF."""

    name = "export_pdf"
    description = """
    Export a presentation to PDF. Returns the PDF as base64 together with its
    size in bytes and an approximate page count (0 when it cannot be determined).

    Input:
    - presentation_id: Presentation ID or URL
    """
    args_schema = ExportPDFInput

    def run(self, tool_input: ExportPDFInput) -> ExportPDFOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)

        self.log_info("Exporting presentation to PDF", presentation_id=presentation_id)

        try:
            stream = self.services.drive.export_file(presentation_id, PDF_MIME_TYPE)
        except Exception as e:
            raise classify_api_error(
                e,
                failure_kind=ErrorKind.EXPORT_FAILED,
                context="failed to export presentation"
            ) from e

        with closing(stream):
            try:
                data = stream.read()
            except OSError as e:
                raise OperationError(
                    f"failed to read PDF data: {e}",
                    kind=ErrorKind.EXPORT_FAILED
                ) from e

        page_count = count_pdf_pages(data)

        self.log_info(
            "Presentation exported successfully",
            presentation_id=presentation_id,
            file_size=len(data),
            page_count=page_count,
        )
        return ExportPDFOutput(
            pdf_base64=base64.b64encode(data).decode("ascii"),
            page_count=page_count,
            file_size=len(data),
        )
