"""
Object deletion.
"""

from typing import List, Optional

from pydantic import Field

from slides_mcp.core.request_builders import build_delete_requests
from slides_mcp.core.tree_walker import categorize_ids, dedupe_ids
from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.utils.exceptions import ErrorKind, NotFoundError
from slides_mcp.utils.validators import validate_object_ids, validate_presentation_id


class DeleteObjectInput(ToolInput):
    """Input schema for delete_object tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    object_id: Optional[str] = Field(default=None, description="Single object ID to delete")
    multiple: Optional[List[str]] = Field(default=None, description="Object IDs to delete in one batch")


class DeleteObjectOutput(ToolOutput):
    deleted_count: int
    deleted_ids: List[str]
    not_found_ids: List[str] = Field(default_factory=list)


class DeleteObjectTool(SlidesTool):
    """Tool for deleting one or more objects."""

    name = "delete_object"
    description = """
    Delete one or more objects (shapes, images, videos, tables, groups, ...) from a
    presentation in a single batch. IDs that do not exist are reported in
    not_found_ids; the call only fails if none of them exist.

    Input:
    - presentation_id: Presentation ID or URL
    - object_id: One object ID, and/or
    - multiple: List of object IDs
    """
    args_schema = DeleteObjectInput

    def run(self, tool_input: DeleteObjectInput) -> DeleteObjectOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        requested = dedupe_ids(validate_object_ids(tool_input.object_id, tool_input.multiple))

        self.log_info("Deleting objects", presentation_id=presentation_id, object_count=len(requested))

        document = self.fetch_document(presentation_id)
        existing, not_found = categorize_ids(document, requested)
        if not existing:
            raise NotFoundError(
                f"none of the specified objects exist: {', '.join(not_found)}",
                details={"not_found_ids": not_found}
            )

        self.submit_batch(presentation_id, build_delete_requests(existing), ErrorKind.DELETE_FAILED)

        if not_found:
            self.log_warning("Some objects were not found", presentation_id=presentation_id, not_found_ids=not_found)
        self.log_info("Objects deleted successfully", presentation_id=presentation_id, deleted_count=len(existing))

        return DeleteObjectOutput(
            deleted_count=len(existing),
            deleted_ids=existing,
            not_found_ids=not_found,
        )
