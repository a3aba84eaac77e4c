"""
Tests for batchUpdate request builders.
"""

import pytest

from slides_mcp.core.document import Dimension, ImageElement, Size, Transform, parse_document
from slides_mcp.core.request_builders import (
    apply_field_updates,
    build_create_image_request,
    build_delete_requests,
    build_replace_image_requests,
    build_replace_text_requests,
    build_transform_update_request,
    drive_image_url,
    generate_object_id,
    image_property_updates,
    presentation_url,
    video_property_updates,
)
from slides_mcp.utils.exceptions import ObjectStateError


def test_generate_object_id_unique_and_short():
    first = generate_object_id("img", "pres_1", "slide_1")
    second = generate_object_id("img", "pres_1", "slide_1")
    assert first.startswith("img_")
    assert len(first) == len("img_") + 16
    assert first != second


def test_urls():
    assert drive_image_url("abc") == "https://drive.google.com/uc?id=abc&export=download"
    assert presentation_url("p1") == "https://docs.google.com/presentation/d/p1/edit"


class TestCreateImage:
    """createImage request construction."""

    def test_position_and_size_in_emu(self):
        request = build_create_image_request(
            "img_x", "slide_1", "https://img", position=(100, 50), width=200, height=150
        )
        props = request["createImage"]["elementProperties"]
        assert props["pageObjectId"] == "slide_1"
        assert props["transform"]["translateX"] == 1270000
        assert props["transform"]["translateY"] == 635000
        assert props["transform"]["scaleX"] == 1.0
        assert props["size"]["width"] == {"magnitude": 2540000, "unit": "EMU"}
        assert props["size"]["height"] == {"magnitude": 1905000, "unit": "EMU"}

    def test_defaults_omit_transform_and_size(self):
        request = build_create_image_request("img_x", "slide_1", "https://img")
        props = request["createImage"]["elementProperties"]
        assert "transform" not in props
        assert "size" not in props

    def test_single_size_axis(self):
        request = build_create_image_request("img_x", "slide_1", "https://img", width=100)
        assert list(request["createImage"]["elementProperties"]["size"]) == ["width"]


class TestReplaceImage:
    """deleteObject + createImage pair."""

    def _element(self):
        return ImageElement(
            object_id="img_old",
            transform=Transform(scale_x=0.5, scale_y=0.5, translate_x=10, translate_y=20, unit=""),
            size=Size(width=Dimension(300), height=Dimension(200)),
        )

    def test_delete_then_create_with_size(self):
        requests = build_replace_image_requests(self._element(), "slide_1", "img_new", "https://img")
        assert requests[0] == {"deleteObject": {"objectId": "img_old"}}
        props = requests[1]["createImage"]["elementProperties"]
        assert requests[1]["createImage"]["objectId"] == "img_new"
        assert props["transform"]["scaleX"] == 0.5
        assert props["transform"]["translateY"] == 20
        assert props["transform"]["unit"] == "EMU"
        assert props["size"]["width"]["magnitude"] == 300

    def test_without_preserve_size(self):
        requests = build_replace_image_requests(
            self._element(), "slide_1", "img_new", "https://img", preserve_size=False
        )
        props = requests[1]["createImage"]["elementProperties"]
        assert "size" not in props
        assert "transform" in props


def test_image_property_updates_and_mask():
    updates, modified = image_property_updates(
        crop={"top": 0.1, "bottom": None, "left": 0.2, "right": None},
        brightness=0.5,
        transparency=0.3,
        recolor="sepia",
    )
    properties, fields = apply_field_updates(updates)

    assert modified == ["crop", "brightness", "transparency", "recolor"]
    assert fields == "cropProperties.topOffset,cropProperties.leftOffset,brightness,transparency,recolor"
    assert properties == {
        "cropProperties": {"topOffset": 0.1, "leftOffset": 0.2},
        "brightness": 0.5,
        "transparency": 0.3,
        "recolor": {"name": "SEPIA"},
    }


def test_recolor_none_clears_in_mask_only():
    updates, modified = image_property_updates(recolor="none")
    properties, fields = apply_field_updates(updates)
    assert modified == ["recolor"]
    assert fields == "recolor"
    assert properties == {}


def test_video_property_updates_in_milliseconds():
    updates, modified = video_property_updates(start_time=1.5, end_time=30, autoplay=True, mute=False)
    properties, fields = apply_field_updates(updates)
    assert modified == ["start_time", "end_time", "autoplay", "mute"]
    assert fields == "start,end,autoPlay,mute"
    assert properties == {"start": 1500, "end": 30000, "autoPlay": True, "mute": False}


class TestTransformUpdate:
    """Absolute transform updates for move/resize."""

    def test_move_keeps_scale_and_shear(self):
        element = ImageElement(
            object_id="img",
            transform=Transform(scale_x=2, scale_y=3, shear_x=0.1, translate_x=1, translate_y=2),
        )
        request = build_transform_update_request(element, position=(10, 20))
        body = request["updatePageElementTransform"]
        assert body["applyMode"] == "ABSOLUTE"
        assert body["transform"]["translateX"] == 127000
        assert body["transform"]["translateY"] == 254000
        assert body["transform"]["scaleX"] == 2
        assert body["transform"]["shearX"] == 0.1

    def test_resize_multiplies_current_scale(self, presentation_data):
        video = parse_document(presentation_data).slides[1].elements[1]
        request = build_transform_update_request(video, height=90)
        transform = request["updatePageElementTransform"]["transform"]
        # size height 2250000 EMU -> 1143000 EMU, on top of scale 0.5
        assert transform["scaleY"] == pytest.approx(0.5 * 1143000 / 2250000)
        assert transform["scaleX"] == pytest.approx(transform["scaleY"])

    def test_resize_both_axes_keeps_existing_scale(self, presentation_data):
        video = parse_document(presentation_data).slides[1].elements[1]
        request = build_transform_update_request(video, width=200, height=100)
        transform = request["updatePageElementTransform"]["transform"]
        assert transform["scaleX"] == pytest.approx(0.5 * 2540000 / 4000000)
        assert transform["scaleY"] == pytest.approx(0.5 * 1270000 / 2250000)
        assert transform["scaleX"] == pytest.approx(0.3175)

    def test_resize_without_size_fails(self):
        element = ImageElement(object_id="img", transform=Transform())
        with pytest.raises(ObjectStateError):
            build_transform_update_request(element, width=100)


def test_build_delete_requests():
    assert build_delete_requests(["a", "b"]) == [
        {"deleteObject": {"objectId": "a"}},
        {"deleteObject": {"objectId": "b"}},
    ]


def test_replace_text_requests_for_table_cell():
    requests = build_replace_text_requests("table_1", "Bonjour", cell_location=(1, 0))
    assert requests[0]["deleteText"] == {
        "objectId": "table_1",
        "textRange": {"type": "ALL"},
        "cellLocation": {"rowIndex": 1, "columnIndex": 0},
    }
    assert requests[1]["insertText"]["text"] == "Bonjour"
    assert requests[1]["insertText"]["insertionIndex"] == 0
    assert requests[1]["insertText"]["cellLocation"] == {"rowIndex": 1, "columnIndex": 0}


def test_replace_text_requests_for_shape():
    requests = build_replace_text_requests("shape_1", "Hola")
    assert "cellLocation" not in requests[0]["deleteText"]
    assert list(requests[0]) == ["deleteText"]
    assert list(requests[1]) == ["insertText"]
