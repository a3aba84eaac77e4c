"""
Builders for Slides API batchUpdate requests.

Every builder returns plain request dicts ready for ``presentations.batchUpdate``.
When a builder returns several requests their order is significant: the batch is
applied in order and atomically.
"""

import hashlib
import time
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from slides_mcp.core.document import AnyElement, Transform
from slides_mcp.core.geometry import compute_scale_from_target_size, points_to_emu

# (field path, value). A value of None keeps the field in the mask but sends no
# value, which clears it on the server side.
FieldUpdate = Tuple[str, Any]

DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?id={file_id}&export=download"
PRESENTATION_URL = "https://docs.google.com/presentation/d/{presentation_id}/edit"


def generate_object_id(prefix: str, *parts: str) -> str:
    """
    Generate a short unique objectId (the Slides API allows at most 50 characters).
    """
    unique_str = "_".join(list(parts) + [str(time.time()), uuid.uuid4().hex])
    object_id_hash = hashlib.md5(unique_str.encode()).hexdigest()[:16]
    return f"{prefix}_{object_id_hash}"


def drive_image_url(file_id: str) -> str:
    """Direct-download URL for an uploaded Drive file."""
    return DRIVE_DOWNLOAD_URL.format(file_id=file_id)


def presentation_url(presentation_id: str) -> str:
    return PRESENTATION_URL.format(presentation_id=presentation_id)


def _emu(magnitude: float) -> Dict[str, Any]:
    return {"magnitude": magnitude, "unit": "EMU"}


# ============================================================================
# Images
# ============================================================================

def build_create_image_request(
    object_id: str,
    slide_id: str,
    image_url: str,
    position: Optional[Tuple[float, float]] = None,
    width: Optional[float] = None,
    height: Optional[float] = None
) -> Dict[str, Any]:
    """
    Build a createImage request.

    Position and size are in points. The transform is only sent when a position
    is given; each size axis is only sent when supplied.
    """
    element_properties: Dict[str, Any] = {"pageObjectId": slide_id}

    if position is not None:
        x, y = position
        element_properties["transform"] = {
            "scaleX": 1.0,
            "scaleY": 1.0,
            "translateX": points_to_emu(x),
            "translateY": points_to_emu(y),
            "unit": "EMU",
        }

    size: Dict[str, Any] = {}
    if width is not None:
        size["width"] = _emu(points_to_emu(width))
    if height is not None:
        size["height"] = _emu(points_to_emu(height))
    if size:
        element_properties["size"] = size

    return {
        "createImage": {
            "objectId": object_id,
            "url": image_url,
            "elementProperties": element_properties,
        }
    }


def build_replace_image_requests(
    old_element: AnyElement,
    slide_id: str,
    new_object_id: str,
    image_url: str,
    preserve_size: bool = True
) -> List[Dict[str, Any]]:
    """
    Delete the old image, then create the new one in its place.

    The old transform is copied (unit defaults to EMU); the old size is copied
    only when ``preserve_size`` is set.
    """
    element_properties: Dict[str, Any] = {"pageObjectId": slide_id}

    if old_element.transform is not None:
        element_properties["transform"] = old_element.transform.to_api()

    if preserve_size and old_element.size is not None:
        size = old_element.size.to_api()
        if size:
            element_properties["size"] = size

    return [
        {"deleteObject": {"objectId": old_element.object_id}},
        {
            "createImage": {
                "objectId": new_object_id,
                "url": image_url,
                "elementProperties": element_properties,
            }
        },
    ]


def image_property_updates(
    crop: Optional[Dict[str, Optional[float]]] = None,
    brightness: Optional[float] = None,
    contrast: Optional[float] = None,
    transparency: Optional[float] = None,
    recolor: Optional[str] = None
) -> Tuple[List[FieldUpdate], List[str]]:
    """
    Collect image property changes as (field, value) pairs.

    Returns:
        (field updates, names of the modified properties)
    """
    updates: List[FieldUpdate] = []
    modified: List[str] = []

    if crop:
        crop_updates = [
            (f"cropProperties.{edge}Offset", crop[edge])
            for edge in ("top", "bottom", "left", "right")
            if crop.get(edge) is not None
        ]
        if crop_updates:
            updates.extend(crop_updates)
            modified.append("crop")

    for name, value in (("brightness", brightness), ("contrast", contrast), ("transparency", transparency)):
        if value is not None:
            updates.append((name, value))
            modified.append(name)

    if recolor is not None:
        name = recolor.strip().upper()
        # "NONE" clears the effect
        updates.append(("recolor", None if name in ("", "NONE") else {"name": name}))
        modified.append("recolor")

    return updates, modified


def video_property_updates(
    start_time: Optional[float] = None,
    end_time: Optional[float] = None,
    autoplay: Optional[bool] = None,
    mute: Optional[bool] = None
) -> Tuple[List[FieldUpdate], List[str]]:
    """
    Collect video property changes. Times are given in seconds and sent in ms.
    """
    updates: List[FieldUpdate] = []
    modified: List[str] = []

    if start_time is not None:
        updates.append(("start", int(start_time * 1000)))
        modified.append("start_time")
    if end_time is not None:
        updates.append(("end", int(end_time * 1000)))
        modified.append("end_time")
    if autoplay is not None:
        updates.append(("autoPlay", autoplay))
        modified.append("autoplay")
    if mute is not None:
        updates.append(("mute", mute))
        modified.append("mute")

    return updates, modified


def apply_field_updates(updates: Sequence[FieldUpdate]) -> Tuple[Dict[str, Any], str]:
    """
    Turn (field, value) pairs into a nested properties dict and its field mask.

    Dotted paths become nested dicts. Fields whose value is None appear in the
    mask only.
    """
    properties: Dict[str, Any] = {}
    fields = []
    for path, value in updates:
        fields.append(path)
        if value is None:
            continue
        target = properties
        *parents, leaf = path.split(".")
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = value
    return properties, ",".join(fields)


def build_update_image_properties_request(object_id: str, updates: Sequence[FieldUpdate]) -> Dict[str, Any]:
    properties, fields = apply_field_updates(updates)
    return {
        "updateImageProperties": {
            "objectId": object_id,
            "imageProperties": properties,
            "fields": fields,
        }
    }


def build_update_video_properties_request(object_id: str, updates: Sequence[FieldUpdate]) -> Dict[str, Any]:
    properties, fields = apply_field_updates(updates)
    return {
        "updateVideoProperties": {
            "objectId": object_id,
            "videoProperties": properties,
            "fields": fields,
        }
    }


# ============================================================================
# Transform
# ============================================================================

def build_transform_update_request(
    element: AnyElement,
    position: Optional[Tuple[float, float]] = None,
    width: Optional[float] = None,
    height: Optional[float] = None
) -> Dict[str, Any]:
    """
    Build an ABSOLUTE updatePageElementTransform for a move and/or resize.

    Position is in points. Size targets are in points and are turned into
    factors applied on top of the current scale. Shear is kept as-is.

    Raises:
        ObjectStateError: If a resize is requested and the element's size is unknown
    """
    current = element.transform or Transform()
    new_transform = Transform(
        scale_x=current.scale_x,
        scale_y=current.scale_y,
        translate_x=current.translate_x,
        translate_y=current.translate_y,
        shear_x=current.shear_x,
        shear_y=current.shear_y,
        unit="EMU",
    )

    if position is not None:
        new_transform.translate_x = points_to_emu(position[0])
        new_transform.translate_y = points_to_emu(position[1])

    if width is not None or height is not None:
        factor_x, factor_y = compute_scale_from_target_size(
            element.current_width(),
            element.current_height(),
            target_width=width,
            target_height=height,
        )
        new_transform.scale_x = current.scale_x * factor_x
        new_transform.scale_y = current.scale_y * factor_y

    return {
        "updatePageElementTransform": {
            "objectId": element.object_id,
            "applyMode": "ABSOLUTE",
            "transform": new_transform.to_api(),
        }
    }


# ============================================================================
# Objects and text
# ============================================================================

def build_delete_requests(object_ids: Sequence[str]) -> List[Dict[str, Any]]:
    return [{"deleteObject": {"objectId": object_id}} for object_id in object_ids]


def build_replace_text_requests(
    object_id: str,
    text: str,
    cell_location: Optional[Tuple[int, int]] = None
) -> List[Dict[str, Any]]:
    """
    Replace all text of a shape (or of one table cell) with ``text``.

    Emits deleteText(ALL) followed by insertText at index 0.
    """
    delete_text: Dict[str, Any] = {"objectId": object_id, "textRange": {"type": "ALL"}}
    insert_text: Dict[str, Any] = {"objectId": object_id, "text": text, "insertionIndex": 0}
    if cell_location is not None:
        location = {"rowIndex": cell_location[0], "columnIndex": cell_location[1]}
        delete_text["cellLocation"] = location
        insert_text["cellLocation"] = dict(location)
    return [{"deleteText": delete_text}, {"insertText": insert_text}]
