"""
Google Slides API adapter.
"""

from typing import Any, Dict, List

from googleapiclient.discovery import build

from slides_mcp.utils.logging_config import get_logger

logger = get_logger(__name__)


class SlidesService:
    """Thin wrapper over the ``slides v1`` discovery client."""

    def __init__(self, service):
        self._service = service

    @classmethod
    def from_credentials(cls, credentials) -> "SlidesService":
        return cls(build("slides", "v1", credentials=credentials, cache_discovery=False))

    def get_presentation(self, presentation_id: str) -> Dict[str, Any]:
        return self._service.presentations().get(presentationId=presentation_id).execute()

    def batch_update(self, presentation_id: str, requests: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Submit requests as one atomic batch."""
        logger.debug(
            "Submitting batch update",
            extra={"extra_data": {"presentation_id": presentation_id, "request_count": len(requests)}}
        )
        return self._service.presentations().batchUpdate(
            presentationId=presentation_id,
            body={"requests": requests}
        ).execute()

    def create_presentation(self, title: str) -> Dict[str, Any]:
        return self._service.presentations().create(body={"title": title}).execute()
