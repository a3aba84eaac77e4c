"""
Base class for Slides tools.

A tool is a named capability with a pydantic input schema. ``invoke`` validates raw
arguments against the schema and hands the model to ``run``; ``run`` does the work
and returns a pydantic output model. Remote failures are mapped onto the error
taxonomy here, in one place.
"""

from typing import Any, ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict

from slides_mcp.core.document import Document, parse_document
from slides_mcp.services import ServiceBundle
from slides_mcp.utils.config_loader import AppConfig, get_config
from slides_mcp.utils.exceptions import ErrorKind, classify_api_error
from slides_mcp.utils.logging_config import get_logger

logger = get_logger(__name__)


class ToolInput(BaseModel):
    """Base input schema. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class ToolOutput(BaseModel):
    pass


class SlidesTool:
    """Base class for all Slides tools."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    args_schema: ClassVar[Type[ToolInput]] = ToolInput

    def __init__(self, services: ServiceBundle, config: Optional[AppConfig] = None):
        self.services = services
        self.config = config or get_config()

    def invoke(self, arguments: Dict[str, Any]) -> ToolOutput:
        """
        Validate raw arguments and run the tool.

        Raises:
            pydantic.ValidationError: If arguments do not match the schema
            SlidesToolError: On any domain failure
        """
        return self.run(self.args_schema.model_validate(arguments))

    def run(self, tool_input: ToolInput) -> ToolOutput:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Shared remote-call helpers
    # ------------------------------------------------------------------

    def fetch_document(self, presentation_id: str) -> Document:
        """
        Fetch and parse a presentation.

        Raises:
            NotFoundError: PRESENTATION_NOT_FOUND
            AccessDeniedError: ACCESS_DENIED
            ServiceError: Anything else
        """
        try:
            data = self.services.slides.get_presentation(presentation_id)
        except Exception as e:
            raise classify_api_error(e, context="failed to get presentation") from e
        return parse_document(data)

    def submit_batch(
        self,
        presentation_id: str,
        requests: List[Dict[str, Any]],
        failure_kind: ErrorKind
    ) -> Dict[str, Any]:
        """
        Submit requests as one atomic batch.

        Raises:
            SlidesToolError: Not-found/forbidden mapped, else ``failure_kind``
        """
        try:
            return self.services.slides.batch_update(presentation_id, requests)
        except Exception as e:
            raise classify_api_error(e, failure_kind=failure_kind) from e

    def log_info(self, message: str, **fields: Any) -> None:
        logger.info(message, extra={"extra_data": {"tool": self.name, **fields}})

    def log_warning(self, message: str, **fields: Any) -> None:
        logger.warning(message, extra={"extra_data": {"tool": self.name, **fields}})
