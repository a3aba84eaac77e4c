"""
Tests for error mapping, configuration, logging, auth and the API adapters.
"""

import io
import json
import logging
from unittest.mock import Mock, patch

import pydantic
import pytest

from slides_mcp.services import DriveService, TranslateService
from slides_mcp.utils.config_loader import AppConfig
from slides_mcp.utils.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    OperationError,
    ServiceError,
    SlidesToolError,
    api_error_message,
    classify_api_error,
    is_folder_not_found_error,
    is_parent_not_found_error,
)
from slides_mcp.utils.google_auth import load_credentials
from slides_mcp.utils.logging_config import JSONFormatter


# ============================================================================
# Errors
# ============================================================================

def test_error_to_dict():
    error = NotFoundError("gone", details={"not_found_ids": ["x"]})
    assert error.error_code == "OBJECT_NOT_FOUND"
    assert error.to_dict() == {"error": "OBJECT_NOT_FOUND", "message": "gone", "details": {"not_found_ids": ["x"]}}
    assert SlidesToolError("boom").to_dict() == {"error": "SERVICE_ERROR", "message": "boom"}


def test_classify_http_not_found(make_http_error):
    error = classify_api_error(make_http_error(404, "Requested entity was not found."))
    assert isinstance(error, NotFoundError)
    assert error.kind == ErrorKind.PRESENTATION_NOT_FOUND
    assert "Requested entity was not found." in error.message


def test_classify_http_forbidden(make_http_error):
    error = classify_api_error(make_http_error(403, "The caller does not have permission"))
    assert isinstance(error, AccessDeniedError)
    assert error.kind == ErrorKind.ACCESS_DENIED


def test_classify_other_failures():
    error = classify_api_error(RuntimeError("quota exceeded"), failure_kind=ErrorKind.COPY_FAILED)
    assert isinstance(error, OperationError)
    assert error.kind == ErrorKind.COPY_FAILED

    error = classify_api_error(RuntimeError("socket closed"), context="failed to get presentation")
    assert isinstance(error, ServiceError)
    assert error.message == "failed to get presentation: socket closed"


def test_api_error_message_prefers_json_body(make_http_error):
    assert api_error_message(make_http_error(400, "Invalid requests[0]")) == "Invalid requests[0]"
    assert api_error_message(ValueError("plain")) == "plain"


def test_folder_error_signatures():
    assert is_parent_not_found_error(Exception("Invalid parent folder"))
    assert not is_parent_not_found_error(Exception("File not found: abc"))
    assert is_folder_not_found_error(Exception("File not found: abc"))
    assert not is_folder_not_found_error(Exception("rate limit"))


# ============================================================================
# Configuration and logging
# ============================================================================

def test_config_defaults(config):
    assert config.search_context_chars == 50
    assert config.comments_page_size == 100
    assert config.translate_batch_size == 128
    assert config.log_level == "INFO"


def test_config_log_level_normalized(tmp_path):
    assert AppConfig(log_level="debug", token_path=tmp_path / "t.json").log_level == "DEBUG"


def test_config_rejects_invalid_values(tmp_path):
    with pytest.raises(pydantic.ValidationError):
        AppConfig(log_level="LOUD")
    with pytest.raises(pydantic.ValidationError):
        AppConfig(translate_batch_size=0)


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("SEARCH_CONTEXT_CHARS", "20")
    assert AppConfig().search_context_chars == 20


def test_json_formatter_includes_extra_data():
    record = logging.LogRecord("slides", logging.INFO, __file__, 1, "Image added", None, None)
    record.extra_data = {"tool": "add_image", "object_id": "img_1"}
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "Image added"
    assert payload["level"] == "INFO"
    assert payload["tool"] == "add_image"
    assert payload["object_id"] == "img_1"


# ============================================================================
# Auth
# ============================================================================

def test_load_credentials_missing_token(tmp_path):
    with pytest.raises(AuthenticationError):
        load_credentials(tmp_path / "missing.json")


def test_load_credentials_refreshes_expired_token(tmp_path):
    token_path = tmp_path / "token.json"
    token_path.write_text("{}")
    creds = Mock(expired=True, refresh_token="refresh")
    creds.to_json.return_value = '{"token": "new"}'

    with patch("slides_mcp.utils.google_auth.Credentials.from_authorized_user_file", return_value=creds):
        result = load_credentials(token_path)

    assert result is creds
    creds.refresh.assert_called_once()
    assert token_path.read_text() == '{"token": "new"}'


# ============================================================================
# Adapters
# ============================================================================

def test_translate_service_chunks_requests():
    client = Mock()
    client.translations.return_value.list.return_value.execute.side_effect = [
        {"translations": [
            {"translatedText": "Bonjour", "detectedSourceLanguage": "en"},
            {"translatedText": "Monde", "detectedSourceLanguage": "en"},
        ]},
        {"translations": [{"translatedText": "Salut", "detectedSourceLanguage": "en"}]},
    ]
    service = TranslateService(client, batch_size=2)

    batch = service.translate_texts(["Hello", "World", "Hi"], "fr")

    assert batch.texts == ["Bonjour", "Monde", "Salut"]
    assert batch.detected_source_language == "en"
    calls = client.translations.return_value.list.call_args_list
    assert calls[0].kwargs == {"q": ["Hello", "World"], "target": "fr", "format": "text"}
    assert calls[1].kwargs["q"] == ["Hi"]


def test_translate_service_passes_source():
    client = Mock()
    client.translations.return_value.list.return_value.execute.return_value = {
        "translations": [{"translatedText": "Hola"}]
    }
    assert TranslateService(client).translate_text("Hello", "es", source="en") == "Hola"
    assert client.translations.return_value.list.call_args.kwargs["source"] == "en"


def test_drive_move_file_replaces_parents():
    client = Mock()
    client.files.return_value.get.return_value.execute.return_value = {"parents": ["root_a", "root_b"]}
    DriveService(client).move_file("pres_1", "folder_9")

    kwargs = client.files.return_value.update.call_args.kwargs
    assert kwargs["addParents"] == "folder_9"
    assert kwargs["removeParents"] == "root_a,root_b"


def test_drive_copy_file_with_parent():
    client = Mock()
    client.files.return_value.copy.return_value.execute.return_value = {"id": "copy_1"}
    DriveService(client).copy_file("src", "Copy", parent_folder_id="folder_9")

    kwargs = client.files.return_value.copy.call_args.kwargs
    assert kwargs["body"] == {"name": "Copy", "parents": ["folder_9"]}
    assert kwargs["supportsAllDrives"] is True


def test_drive_export_file_returns_rewound_stream():
    client = Mock()

    class FakeDownloader:
        def __init__(self, buffer, request):
            self.buffer = buffer

        def next_chunk(self):
            self.buffer.write(b"%PDF-1.4")
            return None, True

    with patch("slides_mcp.services.drive_api.MediaIoBaseDownload", FakeDownloader):
        stream = DriveService(client).export_file("pres_1", "application/pdf")

    assert isinstance(stream, io.BytesIO)
    assert stream.read() == b"%PDF-1.4"
