"""
Google Drive API adapter: uploads, sharing, copies, moves, exports and comments.
"""

import io
from typing import Any, BinaryIO, Dict, Optional

from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseDownload, MediaIoBaseUpload

from slides_mcp.utils.logging_config import get_logger

logger = get_logger(__name__)

COMMENT_FIELDS = (
    "comments(id,kind,content,htmlContent,author,createdTime,modifiedTime,"
    "resolved,deleted,anchor,replies,quotedFileContent),nextPageToken"
)


class DriveService:
    """Thin wrapper over the ``drive v3`` discovery client."""

    def __init__(self, service):
        self._service = service

    @classmethod
    def from_credentials(cls, credentials) -> "DriveService":
        return cls(build("drive", "v3", credentials=credentials, cache_discovery=False))

    def upload_file(self, name: str, mime_type: str, data: bytes) -> Dict[str, Any]:
        media = MediaIoBaseUpload(io.BytesIO(data), mimetype=mime_type, resumable=False)
        return self._service.files().create(
            body={"name": name, "mimeType": mime_type},
            media_body=media,
            fields="id,name,mimeType"
        ).execute()

    def make_file_public(self, file_id: str) -> None:
        """Anyone with the link can read the file."""
        self._service.permissions().create(
            fileId=file_id,
            body={"type": "anyone", "role": "reader"}
        ).execute()

    def copy_file(
        self,
        source_id: str,
        name: str,
        parent_folder_id: Optional[str] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": name}
        if parent_folder_id:
            body["parents"] = [parent_folder_id]
        return self._service.files().copy(
            fileId=source_id,
            body=body,
            supportsAllDrives=True,
            fields="id,name,parents"
        ).execute()

    def move_file(self, file_id: str, folder_id: str) -> None:
        """Replace all current parents of a file with ``folder_id``."""
        file = self._service.files().get(
            fileId=file_id,
            fields="parents",
            supportsAllDrives=True
        ).execute()
        previous_parents = ",".join(file.get("parents", []))

        self._service.files().update(
            fileId=file_id,
            addParents=folder_id,
            removeParents=previous_parents,
            supportsAllDrives=True,
            fields="id,parents"
        ).execute()

    def export_file(self, file_id: str, mime_type: str) -> BinaryIO:
        """
        Export a Workspace file. The returned stream must be closed by the caller.
        """
        request = self._service.files().export_media(fileId=file_id, mimeType=mime_type)
        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, request)
        done = False
        while not done:
            _, done = downloader.next_chunk()
        buffer.seek(0)
        return buffer

    def list_comments(
        self,
        file_id: str,
        include_deleted: bool = False,
        page_size: int = 100,
        page_token: Optional[str] = None
    ) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "fileId": file_id,
            "fields": COMMENT_FIELDS,
            "includeDeleted": include_deleted,
            "pageSize": page_size,
        }
        if page_token:
            kwargs["pageToken"] = page_token
        return self._service.comments().list(**kwargs).execute()
