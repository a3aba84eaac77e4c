"""
Request-scoped model of a Slides presentation.

The raw ``presentations.get`` JSON is parsed into a small tree: a Document owns
slides, masters and layouts; each Page owns page elements and optionally a notes
page; page elements are one of a fixed set of variants. Nothing here outlives a
single tool call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from slides_mcp.utils.exceptions import ServiceError

# Groups deeper than this are treated as malformed upstream data.
MAX_GROUP_DEPTH = 64


@dataclass
class Dimension:
    magnitude: float = 0.0
    unit: str = "EMU"

    def to_api(self) -> Dict[str, Any]:
        return {"magnitude": self.magnitude, "unit": self.unit}


@dataclass
class Size:
    width: Optional[Dimension] = None
    height: Optional[Dimension] = None

    def to_api(self) -> Dict[str, Any]:
        size: Dict[str, Any] = {}
        if self.width is not None:
            size["width"] = self.width.to_api()
        if self.height is not None:
            size["height"] = self.height.to_api()
        return size


@dataclass
class Transform:
    """2D affine transform of a page element."""
    scale_x: float = 1.0
    scale_y: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    shear_x: float = 0.0
    shear_y: float = 0.0
    unit: str = "EMU"

    def to_api(self) -> Dict[str, Any]:
        return {
            "scaleX": self.scale_x,
            "scaleY": self.scale_y,
            "shearX": self.shear_x,
            "shearY": self.shear_y,
            "translateX": self.translate_x,
            "translateY": self.translate_y,
            "unit": self.unit or "EMU",
        }


@dataclass
class PageElement:
    """Common fields of every page element variant."""
    object_id: str
    transform: Optional[Transform] = None
    size: Optional[Size] = None

    @property
    def object_type(self) -> str:
        return "UNKNOWN"

    def current_width(self) -> Optional[float]:
        """Width in EMU as stored on the element, before the transform's scale."""
        if self.size is None or self.size.width is None:
            return None
        return self.size.width.magnitude

    def current_height(self) -> Optional[float]:
        """Height in EMU as stored on the element, before the transform's scale."""
        if self.size is None or self.size.height is None:
            return None
        return self.size.height.magnitude


@dataclass
class ShapeElement(PageElement):
    shape_type: str = ""
    text: str = ""
    has_text: bool = False
    placeholder_type: Optional[str] = None

    @property
    def object_type(self) -> str:
        return self.shape_type or "SHAPE"


@dataclass
class ImageElement(PageElement):
    content_url: Optional[str] = None
    source_url: Optional[str] = None

    @property
    def object_type(self) -> str:
        return "IMAGE"


@dataclass
class VideoElement(PageElement):
    source: Optional[str] = None
    video_id: Optional[str] = None

    @property
    def object_type(self) -> str:
        return "VIDEO"


@dataclass
class TableCell:
    """A table cell. Cells have no object ID; they are addressed by row/column."""
    row_index: int
    column_index: int
    text: str = ""
    has_text: bool = False


@dataclass
class TableElement(PageElement):
    rows: List[List[TableCell]] = field(default_factory=list)

    @property
    def object_type(self) -> str:
        return "TABLE"


@dataclass
class GroupElement(PageElement):
    children: List["AnyElement"] = field(default_factory=list)

    @property
    def object_type(self) -> str:
        return "GROUP"


@dataclass
class OtherElement(PageElement):
    """Lines, charts, word art: kept so their IDs exist, never edited here."""
    kind: str = "UNKNOWN"

    @property
    def object_type(self) -> str:
        return self.kind


AnyElement = Union[ShapeElement, ImageElement, VideoElement, TableElement, GroupElement, OtherElement]


@dataclass
class Page:
    object_id: str
    page_type: str = "SLIDE"
    elements: List[AnyElement] = field(default_factory=list)
    notes_page: Optional["Page"] = None


@dataclass
class Document:
    presentation_id: str
    title: str = ""
    slides: List[Page] = field(default_factory=list)
    masters: List[Page] = field(default_factory=list)
    layouts: List[Page] = field(default_factory=list)


# ============================================================================
# Parsing from the Slides API representation
# ============================================================================

def extract_text(text_content: Optional[Dict[str, Any]]) -> str:
    """Concatenate the text runs of a TextContent structure, stripped."""
    if not text_content:
        return ""
    parts = []
    for element in text_content.get("textElements", []) or []:
        text_run = element.get("textRun")
        if text_run and text_run.get("content"):
            parts.append(text_run["content"])
    return "".join(parts).strip()


def _parse_dimension(data: Optional[Dict[str, Any]]) -> Optional[Dimension]:
    if not data:
        return None
    return Dimension(magnitude=float(data.get("magnitude", 0.0)), unit=data.get("unit", "EMU"))


def _parse_size(data: Optional[Dict[str, Any]]) -> Optional[Size]:
    if not data:
        return None
    return Size(width=_parse_dimension(data.get("width")), height=_parse_dimension(data.get("height")))


def _parse_transform(data: Optional[Dict[str, Any]]) -> Optional[Transform]:
    if not data:
        return None
    return Transform(
        scale_x=float(data.get("scaleX", 1.0)),
        scale_y=float(data.get("scaleY", 1.0)),
        translate_x=float(data.get("translateX", 0.0)),
        translate_y=float(data.get("translateY", 0.0)),
        shear_x=float(data.get("shearX", 0.0)),
        shear_y=float(data.get("shearY", 0.0)),
        unit=data.get("unit", "EMU"),
    )


def _parse_table(data: Dict[str, Any]) -> List[List[TableCell]]:
    rows = []
    for row_index, row in enumerate(data.get("tableRows", []) or []):
        cells = []
        for column_index, cell in enumerate((row or {}).get("tableCells", []) or []):
            cell = cell or {}
            location = cell.get("location", {})
            cells.append(TableCell(
                row_index=location.get("rowIndex", row_index),
                column_index=location.get("columnIndex", column_index),
                text=extract_text(cell.get("text")),
                has_text="text" in cell,
            ))
        rows.append(cells)
    return rows


def parse_element(data: Dict[str, Any], depth: int = 0) -> AnyElement:
    """
    Parse one ``PageElement`` JSON object into its variant.

    Raises:
        ServiceError: If groups are nested deeper than MAX_GROUP_DEPTH
    """
    if depth > MAX_GROUP_DEPTH:
        raise ServiceError(
            f"malformed presentation: groups nested deeper than {MAX_GROUP_DEPTH} levels"
        )

    common = {
        "object_id": data.get("objectId", ""),
        "transform": _parse_transform(data.get("transform")),
        "size": _parse_size(data.get("size")),
    }

    if "shape" in data:
        shape = data["shape"] or {}
        placeholder = shape.get("placeholder") or {}
        return ShapeElement(
            shape_type=shape.get("shapeType", ""),
            text=extract_text(shape.get("text")),
            has_text="text" in shape,
            placeholder_type=placeholder.get("type"),
            **common,
        )
    if "image" in data:
        image = data["image"] or {}
        return ImageElement(content_url=image.get("contentUrl"), source_url=image.get("sourceUrl"), **common)
    if "video" in data:
        video = data["video"] or {}
        return VideoElement(source=video.get("source"), video_id=video.get("id"), **common)
    if "table" in data:
        return TableElement(rows=_parse_table(data["table"] or {}), **common)
    if "elementGroup" in data:
        children = (data["elementGroup"] or {}).get("children", []) or []
        return GroupElement(children=[parse_element(child, depth + 1) for child in children if child], **common)
    if "line" in data:
        return OtherElement(kind="LINE", **common)
    if "sheetsChart" in data:
        return OtherElement(kind="SHEETS_CHART", **common)
    if "wordArt" in data:
        return OtherElement(kind="WORD_ART", **common)
    return OtherElement(**common)


def parse_page(data: Dict[str, Any], page_type: str = "SLIDE") -> Page:
    """Parse a ``Page`` JSON object, including a slide's notes page."""
    notes_page = None
    notes = (data.get("slideProperties") or {}).get("notesPage")
    if notes:
        notes_page = parse_page(notes, page_type="NOTES")
    return Page(
        object_id=data.get("objectId", ""),
        page_type=data.get("pageType", page_type),
        elements=[parse_element(element) for element in data.get("pageElements", []) or [] if element],
        notes_page=notes_page,
    )


def parse_document(data: Dict[str, Any]) -> Document:
    """Parse a ``presentations.get`` response into a Document."""
    return Document(
        presentation_id=data.get("presentationId", ""),
        title=data.get("title", ""),
        slides=[parse_page(page, "SLIDE") for page in data.get("slides", []) or [] if page],
        masters=[parse_page(page, "MASTER") for page in data.get("masters", []) or [] if page],
        layouts=[parse_page(page, "LAYOUT") for page in data.get("layouts", []) or [] if page],
    )
