"""
Input validation utilities for the Slides tools.
Every check runs before any remote call and raises ValidationError with a
specific error kind.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from slides_mcp.utils.exceptions import ErrorKind, ValidationError


# Presentation URL patterns
PRESENTATION_URL_PATTERNS = [
    re.compile(r'/presentation/d/([a-zA-Z0-9-_]+)'),
    re.compile(r'docs\.google\.com/presentation.*[?&]id=([a-zA-Z0-9-_]+)'),
    re.compile(r'drive\.google\.com/file/d/([a-zA-Z0-9-_]+)'),
]

TRANSITION_TYPES = frozenset([
    "NONE", "FADE", "SLIDE_FROM_RIGHT", "SLIDE_FROM_LEFT", "SLIDE_FROM_TOP",
    "SLIDE_FROM_BOTTOM", "FLIP", "CUBE", "GALLERY", "ZOOM", "DISSOLVE",
])

RECOLOR_PRESETS = frozenset(
    ["NONE", "GRAYSCALE", "NEGATIVE", "SEPIA"]
    + [f"LIGHT{i}" for i in range(1, 11)]
    + [f"DARK{i}" for i in range(1, 11)]
)

TRANSLATE_SCOPES = ("all", "slide", "object")

MAX_TRANSITION_DURATION = 10.0


def extract_presentation_id(id_or_url: str) -> str:
    """Extract a presentation ID from a Slides/Drive URL, or return the input as-is."""
    for pattern in PRESENTATION_URL_PATTERNS:
        match = pattern.search(id_or_url)
        if match:
            return match.group(1)
    return id_or_url


def validate_required(
    value: Optional[str],
    field: str,
    kind: ErrorKind = ErrorKind.INVALID_ARGUMENTS
) -> str:
    """
    Require a non-empty string.

    Returns:
        The stripped value

    Raises:
        ValidationError: If the value is missing or blank
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", kind=kind, field=field)
    return value.strip()


def validate_presentation_id(value: Optional[str], field: str = "presentation_id") -> str:
    """
    Validate a presentation ID. Slides URLs are accepted and reduced to the ID.

    Raises:
        ValidationError: INVALID_PRESENTATION_ID if missing
    """
    value = validate_required(value, field, ErrorKind.INVALID_PRESENTATION_ID)
    return extract_presentation_id(value)


def validate_slide_reference(
    slide_index: Optional[int],
    slide_id: Optional[str]
) -> Tuple[Optional[int], Optional[str]]:
    """
    Validate that a slide is referenced by a 1-based index or an ID.

    Returns:
        (slide_index, slide_id) normalized; an empty ID becomes None

    Raises:
        ValidationError: INVALID_SLIDE_REFERENCE
    """
    slide_id = slide_id.strip() if slide_id else None
    if slide_id:
        return slide_index, slide_id

    if slide_index is None or slide_index < 1:
        raise ValidationError(
            "either slide_index (1-based) or slide_id is required",
            kind=ErrorKind.INVALID_SLIDE_REFERENCE,
            field="slide_index",
            value=slide_index
        )
    return slide_index, None


def validate_range(
    value: Optional[float],
    minimum: float,
    maximum: float,
    field: str,
    kind: ErrorKind
) -> Optional[float]:
    """Check an optional number against an inclusive range."""
    if value is None:
        return None
    if value < minimum or value > maximum:
        raise ValidationError(
            f"{field} must be between {minimum:g} and {maximum:g}, got {value}",
            kind=kind,
            field=field,
            value=value
        )
    return value


def validate_position(x: float, y: float) -> Tuple[float, float]:
    if x < 0 or y < 0:
        raise ValidationError(
            f"position coordinates must be non-negative, got ({x}, {y})",
            kind=ErrorKind.INVALID_POSITION,
            field="position",
            value=(x, y)
        )
    return x, y


def validate_size(width: Optional[float], height: Optional[float]) -> Tuple[Optional[float], Optional[float]]:
    """
    Validate a size in points: at least one dimension, every given one positive.

    Raises:
        ValidationError: INVALID_SIZE
    """
    if width is None and height is None:
        raise ValidationError(
            "size must have a width and/or height",
            kind=ErrorKind.INVALID_SIZE,
            field="size"
        )
    for name, value in (("width", width), ("height", height)):
        if value is not None and value <= 0:
            raise ValidationError(
                f"size {name} must be positive, got {value}",
                kind=ErrorKind.INVALID_SIZE,
                field=f"size.{name}",
                value=value
            )
    return width, height


def validate_crop(crop: Dict[str, Optional[float]]) -> Dict[str, Optional[float]]:
    """Each crop edge is a fraction in [0, 1]."""
    for edge in ("top", "bottom", "left", "right"):
        validate_range(crop.get(edge), 0.0, 1.0, f"crop.{edge}", ErrorKind.INVALID_CROP)
    return crop


def validate_recolor(recolor: Optional[str]) -> Optional[str]:
    """
    Validate a recolor preset name (case-insensitive). "none" clears the effect.

    Returns:
        Upper-cased preset name
    """
    if recolor is None:
        return None
    name = recolor.strip().upper()
    if name not in RECOLOR_PRESETS:
        raise ValidationError(
            f"'{recolor}' is not a valid recolor preset. "
            f"Valid presets: {', '.join(sorted(RECOLOR_PRESETS))}",
            kind=ErrorKind.INVALID_RECOLOR,
            field="recolor",
            value=recolor
        )
    return name


def validate_video_times(start_time: Optional[float], end_time: Optional[float]) -> None:
    """
    Start/end are non-negative seconds, and end must come after start.

    Raises:
        ValidationError: INVALID_TIME or INVALID_TIME_RANGE
    """
    for name, value in (("start_time", start_time), ("end_time", end_time)):
        if value is not None and value < 0:
            raise ValidationError(
                f"{name} cannot be negative",
                kind=ErrorKind.INVALID_TIME,
                field=name,
                value=value
            )
    if start_time is not None and end_time is not None and end_time <= start_time:
        raise ValidationError(
            f"end_time ({end_time}) must be greater than start_time ({start_time})",
            kind=ErrorKind.INVALID_TIME_RANGE,
            field="end_time",
            value=end_time
        )


def validate_transition_type(transition_type: Optional[str]) -> str:
    name = (transition_type or "").strip().upper()
    if not name:
        raise ValidationError(
            "transition_type is required",
            kind=ErrorKind.INVALID_TRANSITION_TYPE,
            field="transition_type"
        )
    if name not in TRANSITION_TYPES:
        raise ValidationError(
            f"'{transition_type}' is not a valid transition type. "
            f"Valid types: {', '.join(sorted(TRANSITION_TYPES))}",
            kind=ErrorKind.INVALID_TRANSITION_TYPE,
            field="transition_type",
            value=transition_type
        )
    return name


def validate_transition_duration(duration: Optional[float]) -> Optional[float]:
    return validate_range(
        duration, 0.0, MAX_TRANSITION_DURATION, "duration", ErrorKind.INVALID_TRANSITION_DURATION
    )


def validate_query(query: Optional[str]) -> str:
    """The query is searched as given; only an empty query is rejected."""
    if not query:
        raise ValidationError("query is required", kind=ErrorKind.INVALID_QUERY, field="query")
    return query


def validate_context_chars(context_chars: int) -> int:
    if context_chars < 0:
        raise ValidationError(
            "context_chars must be non-negative",
            kind=ErrorKind.INVALID_ARGUMENTS,
            field="context_chars",
            value=context_chars
        )
    return context_chars


def validate_scope(scope: Optional[str]) -> str:
    scope = (scope or "all").strip().lower()
    if scope not in TRANSLATE_SCOPES:
        raise ValidationError(
            "scope must be 'all', 'slide', or 'object'",
            kind=ErrorKind.INVALID_SCOPE,
            field="scope",
            value=scope
        )
    return scope


def validate_object_ids(object_id: Optional[str], multiple: Optional[Iterable[str]]) -> List[str]:
    """
    Merge the single and multiple object ID inputs.

    Returns:
        Raw ID list (single first), not yet deduplicated

    Raises:
        ValidationError: NO_OBJECTS_SPECIFIED if no non-empty ID was given
    """
    ids = []
    if object_id and object_id.strip():
        ids.append(object_id.strip())
    for value in multiple or []:
        if value and value.strip():
            ids.append(value.strip())
    if not ids:
        raise ValidationError(
            "object_id or multiple is required",
            kind=ErrorKind.NO_OBJECTS_SPECIFIED,
            field="object_id"
        )
    return ids
