"""
Text units of a slide and substring search over them.

A text unit is one searchable/translatable piece of text: a shape's text
(including shapes nested in groups), a single table cell, or a shape on the
slide's speaker-notes page.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from slides_mcp.core.document import AnyElement, GroupElement, Page, ShapeElement, TableElement

SPEAKER_NOTES_PREFIX = "SPEAKER_NOTES:"
TABLE_CELL_TYPE = "TABLE_CELL"
ELLIPSIS = "..."


@dataclass
class TextUnit:
    slide_index: int
    object_id: str
    object_type: str
    text: str
    cell_location: Optional[Tuple[int, int]] = None

    @property
    def display_id(self) -> str:
        """Object ID as shown to callers; table cells read ``tableId[row,col]``."""
        if self.cell_location is None:
            return self.object_id
        row, column = self.cell_location
        return f"{self.object_id}[{row},{column}]"


@dataclass
class TextMatch:
    object_id: str
    object_type: str
    start_index: int
    text_context: str


def _element_units(element: AnyElement, slide_index: int) -> Iterator[TextUnit]:
    if isinstance(element, ShapeElement):
        if element.has_text:
            yield TextUnit(slide_index, element.object_id, element.object_type, element.text)
    elif isinstance(element, TableElement):
        for row in element.rows:
            for cell in row:
                if cell.has_text:
                    yield TextUnit(
                        slide_index,
                        element.object_id,
                        TABLE_CELL_TYPE,
                        cell.text,
                        cell_location=(cell.row_index, cell.column_index),
                    )
    elif isinstance(element, GroupElement):
        for child in element.children:
            yield from _element_units(child, slide_index)


def iter_text_units(elements: Iterable[AnyElement], slide_index: int) -> Iterator[TextUnit]:
    """Text units of a sequence of page elements, through groups and tables."""
    for element in elements:
        yield from _element_units(element, slide_index)


def iter_slide_text_units(slide: Page, slide_index: int) -> Iterator[TextUnit]:
    """Text units of a slide followed by those of its speaker notes."""
    yield from iter_text_units(slide.elements, slide_index)
    if slide.notes_page is not None:
        for unit in iter_text_units(slide.notes_page.elements, slide_index):
            unit.object_type = SPEAKER_NOTES_PREFIX + unit.object_type
            yield unit


def extract_context(text: str, match_start: int, match_length: int, context_chars: int) -> str:
    """
    Text around a match, ``context_chars`` on each side, with ``...`` where cut.
    """
    start = max(0, match_start - context_chars)
    end = min(len(text), match_start + match_length + context_chars)
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    return prefix + text[start:end] + suffix


def find_matches(
    text: str,
    query: str,
    case_sensitive: bool = False,
    context_chars: int = 50
) -> List[Tuple[int, str]]:
    """
    Find every occurrence of ``query`` in ``text``, overlaps included.

    "aa" in "aaa" matches at 0 and 1.

    Returns:
        List of (start index, context window)
    """
    if not text or not query:
        return []

    # Lookahead match: overlaps included, offsets index the original text.
    pattern = re.compile(f"(?={re.escape(query)})", 0 if case_sensitive else re.IGNORECASE)
    return [
        (match.start(), extract_context(text, match.start(), len(query), context_chars))
        for match in pattern.finditer(text)
    ]


def search_slide(
    slide: Page,
    slide_index: int,
    query: str,
    case_sensitive: bool = False,
    context_chars: int = 50
) -> List[TextMatch]:
    """All matches on one slide, speaker notes included."""
    results = []
    for unit in iter_slide_text_units(slide, slide_index):
        for start_index, context in find_matches(unit.text, query, case_sensitive, context_chars):
            results.append(TextMatch(
                object_id=unit.display_id,
                object_type=unit.object_type,
                start_index=start_index,
                text_context=context,
            ))
    return results
