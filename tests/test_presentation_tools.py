"""
Tests for create_presentation, copy_presentation, export_pdf and list_comments.
"""

import base64
import io

import pytest

from slides_mcp.tools.comments import ListCommentsTool
from slides_mcp.tools.presentations import CopyPresentationTool, CreatePresentationTool, ExportPDFTool
from slides_mcp.utils.exceptions import (
    AccessDeniedError,
    ErrorKind,
    NotFoundError,
    OperationError,
    ValidationError,
)


SAMPLE_PDF = (
    b"%PDF-1.4\n"
    b"1 0 obj << /Type /Pages /Kids [2 0 R 3 0 R 4 0 R] /Count 3 >> endobj\n"
    b"2 0 obj << /Type /Page /Parent 1 0 R >> endobj\n"
    b"3 0 obj << /Type /Page /Parent 1 0 R >> endobj\n"
    b"4 0 obj << /Type /Page /Parent 1 0 R >> endobj\n"
    b"%%EOF\n"
)


# ============================================================================
# create_presentation
# ============================================================================

class TestCreatePresentation:

    def test_create(self, services, config):
        services.slides.create_presentation.return_value = {"presentationId": "new_1", "title": "Deck"}

        result = CreatePresentationTool(services, config).invoke({"title": "Deck"})

        assert result.presentation_id == "new_1"
        assert result.title == "Deck"
        assert result.url == "https://docs.google.com/presentation/d/new_1/edit"
        assert result.folder_id is None
        assert result.warnings == []
        services.drive.move_file.assert_not_called()

    def test_create_in_folder(self, services, config):
        services.slides.create_presentation.return_value = {"presentationId": "new_1", "title": "Deck"}

        result = CreatePresentationTool(services, config).invoke({"title": "Deck", "folder_id": "folder_9"})

        services.drive.move_file.assert_called_once_with("new_1", "folder_9")
        assert result.folder_id == "folder_9"

    def test_folder_move_failure_is_warning(self, services, config, make_http_error):
        services.slides.create_presentation.return_value = {"presentationId": "new_1", "title": "Deck"}
        services.drive.move_file.side_effect = make_http_error(404, "File not found: folder_9.")

        result = CreatePresentationTool(services, config).invoke({"title": "Deck", "folder_id": "folder_9"})

        assert result.presentation_id == "new_1"
        assert result.folder_id is None
        assert len(result.warnings) == 1
        assert "folder not found" in result.warnings[0]

    def test_blank_title(self, services, config):
        with pytest.raises(ValidationError) as exc_info:
            CreatePresentationTool(services, config).invoke({"title": "   "})
        assert exc_info.value.kind == ErrorKind.INVALID_TITLE
        services.slides.create_presentation.assert_not_called()

    def test_create_failure(self, services, config):
        services.slides.create_presentation.side_effect = RuntimeError("backend error")
        with pytest.raises(OperationError) as exc_info:
            CreatePresentationTool(services, config).invoke({"title": "Deck"})
        assert exc_info.value.kind == ErrorKind.CREATE_FAILED


# ============================================================================
# copy_presentation
# ============================================================================

class TestCopyPresentation:

    def test_copy_from_url(self, services, config):
        services.drive.copy_file.return_value = {"id": "copy_1", "name": "Template copy"}

        result = CopyPresentationTool(services, config).invoke({
            "source_id": "https://docs.google.com/presentation/d/src_1/edit",
            "new_title": "Template copy",
        })

        services.drive.copy_file.assert_called_once_with("src_1", "Template copy", parent_folder_id=None)
        assert result.presentation_id == "copy_1"
        assert result.title == "Template copy"
        assert result.source_id == "src_1"
        assert result.url == "https://docs.google.com/presentation/d/copy_1/edit"

    def test_source_not_found(self, services, config, make_http_error):
        services.drive.copy_file.side_effect = make_http_error(404, "File not found: src_1.")
        with pytest.raises(NotFoundError) as exc_info:
            CopyPresentationTool(services, config).invoke({"source_id": "src_1", "new_title": "Copy"})
        assert exc_info.value.kind == ErrorKind.SOURCE_NOT_FOUND

    def test_invalid_destination_folder(self, services, config):
        services.drive.copy_file.side_effect = RuntimeError("Invalid parent folder: folder_9")
        with pytest.raises(NotFoundError) as exc_info:
            CopyPresentationTool(services, config).invoke({
                "source_id": "src_1",
                "new_title": "Copy",
                "destination_folder_id": "folder_9",
            })
        assert exc_info.value.kind == ErrorKind.FOLDER_NOT_FOUND

    def test_access_denied(self, services, config, make_http_error):
        services.drive.copy_file.side_effect = make_http_error(403, "The user does not have sufficient permissions")
        with pytest.raises(AccessDeniedError):
            CopyPresentationTool(services, config).invoke({"source_id": "src_1", "new_title": "Copy"})

    def test_other_failure(self, services, config):
        services.drive.copy_file.side_effect = RuntimeError("rate limit exceeded")
        with pytest.raises(OperationError) as exc_info:
            CopyPresentationTool(services, config).invoke({"source_id": "src_1", "new_title": "Copy"})
        assert exc_info.value.kind == ErrorKind.COPY_FAILED

    @pytest.mark.parametrize("arguments, kind", [
        ({"source_id": "", "new_title": "Copy"}, ErrorKind.INVALID_SOURCE_ID),
        ({"source_id": "src_1", "new_title": " "}, ErrorKind.INVALID_TITLE),
    ])
    def test_invalid_input(self, services, config, arguments, kind):
        with pytest.raises(ValidationError) as exc_info:
            CopyPresentationTool(services, config).invoke(arguments)
        assert exc_info.value.kind == kind
        services.drive.copy_file.assert_not_called()


# ============================================================================
# export_pdf
# ============================================================================

class TestExportPDF:

    def test_export(self, services, config):
        stream = io.BytesIO(SAMPLE_PDF)
        services.drive.export_file.return_value = stream

        result = ExportPDFTool(services, config).invoke({"presentation_id": "pres_1"})

        services.drive.export_file.assert_called_once_with("pres_1", "application/pdf")
        assert result.page_count == 3
        assert result.file_size == len(SAMPLE_PDF)
        assert base64.b64decode(result.pdf_base64) == SAMPLE_PDF
        assert stream.closed

    def test_presentation_not_found(self, services, config, make_http_error):
        services.drive.export_file.side_effect = make_http_error(404, "File not found: pres_1.")
        with pytest.raises(NotFoundError) as exc_info:
            ExportPDFTool(services, config).invoke({"presentation_id": "pres_1"})
        assert exc_info.value.kind == ErrorKind.PRESENTATION_NOT_FOUND

    def test_export_failure(self, services, config):
        services.drive.export_file.side_effect = RuntimeError("Export size limit exceeded")
        with pytest.raises(OperationError) as exc_info:
            ExportPDFTool(services, config).invoke({"presentation_id": "pres_1"})
        assert exc_info.value.kind == ErrorKind.EXPORT_FAILED


# ============================================================================
# list_comments
# ============================================================================

def _comment(comment_id, resolved=False, replies=None):
    return {
        "id": comment_id,
        "author": {"displayName": "Ann Example", "emailAddress": "ann@example.com"},
        "content": f"Comment {comment_id}",
        "createdTime": "2026-01-09T10:00:00Z",
        "resolved": resolved,
        "replies": replies or [],
    }


class TestListComments:

    @pytest.fixture
    def paged(self, services):
        services.drive.list_comments.side_effect = [
            {
                "comments": [
                    _comment("c1", replies=[{
                        "id": "r1",
                        "author": {"displayName": "Bo"},
                        "content": "Agreed",
                        "createdTime": "2026-01-09T11:00:00Z",
                    }]),
                    _comment("c2", resolved=True),
                ],
                "nextPageToken": "page_2",
            },
            {"comments": [_comment("c3")]},
        ]
        return services

    def test_skips_resolved_by_default(self, paged, config):
        result = ListCommentsTool(paged, config).invoke({"presentation_id": "pres_1"})

        assert [comment.comment_id for comment in result.comments] == ["c1", "c3"]
        assert result.total_count == 2
        assert result.unresolved_count == 2
        assert result.resolved_count == 0

        first = result.comments[0]
        assert first.author.display_name == "Ann Example"
        assert first.replies[0].reply_id == "r1"
        assert first.replies[0].author.display_name == "Bo"

        first_call, second_call = paged.drive.list_comments.call_args_list
        assert first_call.kwargs == {"include_deleted": False, "page_size": 100, "page_token": None}
        assert second_call.kwargs["page_token"] == "page_2"

    def test_include_resolved(self, paged, config):
        result = ListCommentsTool(paged, config).invoke({"presentation_id": "pres_1", "include_resolved": True})
        assert result.total_count == 3
        assert result.resolved_count == 1
        assert result.unresolved_count == 2

    def test_failure(self, services, config):
        services.drive.list_comments.side_effect = RuntimeError("backend error")
        with pytest.raises(OperationError) as exc_info:
            ListCommentsTool(services, config).invoke({"presentation_id": "pres_1"})
        assert exc_info.value.kind == ErrorKind.LIST_COMMENTS_FAILED
