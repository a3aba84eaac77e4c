"""
Pytest configuration and fixtures for testing.
"""

import base64
import json
from unittest.mock import Mock

import pytest
from googleapiclient.errors import HttpError

from slides_mcp.services import DriveService, ServiceBundle, SlidesService, TranslateService
from slides_mcp.utils.config_loader import AppConfig


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def text_content(text):
    """Slides API TextContent with a single run."""
    return {"textElements": [{"paragraphMarker": {}}, {"textRun": {"content": text}}]}


def shape(object_id, text=None, shape_type="TEXT_BOX"):
    data = {"objectId": object_id, "shape": {"shapeType": shape_type}}
    if text is not None:
        data["shape"]["text"] = text_content(text)
    return data


@pytest.fixture
def config(tmp_path):
    """Test configuration with defaults and a temp token path."""
    return AppConfig(
        token_path=tmp_path / "token.json",
        log_dir=tmp_path / "logs",
        search_context_chars=50,
        comments_page_size=100,
        translate_batch_size=128,
    )


@pytest.fixture
def services():
    """Google API adapters replaced by mocks."""
    slides = Mock(spec=SlidesService)
    slides.batch_update.return_value = {"replies": []}
    drive = Mock(spec=DriveService)
    drive.upload_file.return_value = {"id": "file_123", "name": "slides_image", "mimeType": "image/png"}
    translate = Mock(spec=TranslateService)
    return ServiceBundle(slides=slides, drive=drive, translate=translate)


@pytest.fixture
def png_base64():
    return base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def presentation_data():
    """
    Raw presentations.get response.

    Slide 1: title shape, an image, a group (shape + image), speaker notes.
    Slide 2: a 2x2 table (one empty cell), a video at half scale, a shape without text.
    """
    return {
        "presentationId": "pres_1",
        "title": "Quarterly Deck",
        "slides": [
            {
                "objectId": "slide_1",
                "pageElements": [
                    shape("title_1", "Quarterly Results\n"),
                    {
                        "objectId": "img_1",
                        "size": {
                            "width": {"magnitude": 3000000, "unit": "EMU"},
                            "height": {"magnitude": 2000000, "unit": "EMU"},
                        },
                        "transform": {
                            "scaleX": 1, "scaleY": 1,
                            "translateX": 100000, "translateY": 200000,
                            "unit": "EMU",
                        },
                        "image": {"contentUrl": "https://lh3.example/img_1"},
                    },
                    {
                        "objectId": "group_1",
                        "elementGroup": {
                            "children": [
                                shape("grp_shape_1", "Grouped results\n"),
                                {"objectId": "grp_img_1", "image": {}},
                            ]
                        },
                    },
                ],
                "slideProperties": {
                    "notesPage": {
                        "objectId": "notes_1",
                        "pageType": "NOTES",
                        "pageElements": [shape("notes_body_1", "Speaker results note\n")],
                    }
                },
            },
            {
                "objectId": "slide_2",
                "pageElements": [
                    {
                        "objectId": "table_1",
                        "table": {
                            "rows": 2,
                            "columns": 2,
                            "tableRows": [
                                {"tableCells": [
                                    {"location": {"rowIndex": 0, "columnIndex": 0}, "text": text_content("Revenue\n")},
                                    {"location": {"rowIndex": 0, "columnIndex": 1}, "text": text_content("Results\n")},
                                ]},
                                {"tableCells": [
                                    {"location": {"rowIndex": 1, "columnIndex": 0}, "text": text_content("Cost\n")},
                                    {"location": {"rowIndex": 1, "columnIndex": 1}},
                                ]},
                            ],
                        },
                    },
                    {
                        "objectId": "video_1",
                        "size": {
                            "width": {"magnitude": 4000000, "unit": "EMU"},
                            "height": {"magnitude": 2250000, "unit": "EMU"},
                        },
                        "transform": {"scaleX": 0.5, "scaleY": 0.5, "unit": "EMU"},
                        "video": {"source": "YOUTUBE", "id": "dQw4w9WgXcQ"},
                    },
                    shape("empty_shape", shape_type="RECTANGLE"),
                ],
            },
        ],
        "masters": [{"objectId": "master_1", "pageElements": [shape("master_shape", "Master")]}],
        "layouts": [{"objectId": "layout_1", "pageElements": [shape("layout_shape", "Layout")]}],
    }


@pytest.fixture
def make_http_error():
    """Factory for googleapiclient HttpError with a JSON error body."""
    def _make(status, message):
        resp = Mock(status=status, reason=message)
        content = json.dumps({"error": {"code": status, "message": message}}).encode()
        return HttpError(resp, content)
    return _make


@pytest.fixture
def sent_requests(services):
    """Requests passed to the last batch_update call."""
    def _sent():
        args, kwargs = services.slides.batch_update.call_args
        return args[1] if len(args) > 1 else kwargs["requests"]
    return _sent
