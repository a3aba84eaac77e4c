"""
Lookups over the presentation tree: find elements by ID, collect every object ID,
resolve slide references and partition requested IDs by existence.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from slides_mcp.core.document import AnyElement, Document, GroupElement, Page
from slides_mcp.utils.exceptions import ErrorKind, NotFoundError


def iter_elements(elements: Iterable[AnyElement]) -> Iterator[AnyElement]:
    """Yield elements depth-first, each group before its children."""
    for element in elements:
        yield element
        if isinstance(element, GroupElement):
            yield from iter_elements(element.children)


def find_element_by_id(elements: Iterable[AnyElement], target_id: str) -> Optional[AnyElement]:
    """
    Depth-first search for an element by object ID.

    Descends into group children but never into table cells, which have no ID.
    """
    for element in iter_elements(elements):
        if element.object_id == target_id:
            return element
    return None


def find_element_in_slides(
    document: Document,
    target_id: str
) -> Tuple[Optional[AnyElement], Optional[Page]]:
    """Find an element on any slide; returns (element, slide) or (None, None)."""
    for slide in document.slides:
        element = find_element_by_id(slide.elements, target_id)
        if element is not None:
            return element, slide
    return None, None


def _page_ids(page: Page) -> Iterator[str]:
    if page.object_id:
        yield page.object_id
    for element in iter_elements(page.elements):
        if element.object_id:
            yield element.object_id


def collect_all_object_ids(document: Document) -> Set[str]:
    """
    Collect every object ID in the document.

    Covers slides, masters and layouts (the pages and their elements, through
    groups) and the elements of each slide's notes page.
    """
    ids: Set[str] = set()
    for page in list(document.slides) + list(document.masters) + list(document.layouts):
        ids.update(_page_ids(page))
    for slide in document.slides:
        if slide.notes_page is not None:
            for element in iter_elements(slide.notes_page.elements):
                if element.object_id:
                    ids.add(element.object_id)
    return ids


def dedupe_ids(ids: Iterable[str]) -> List[str]:
    """Drop empty and repeated IDs, keeping first-occurrence order."""
    seen: Set[str] = set()
    result = []
    for object_id in ids:
        if not object_id or object_id in seen:
            continue
        seen.add(object_id)
        result.append(object_id)
    return result


def categorize_ids(document: Document, requested_ids: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Partition requested IDs into (existing, not_found), both in caller order.
    """
    all_ids = collect_all_object_ids(document)
    existing = []
    not_found = []
    for object_id in requested_ids:
        if object_id in all_ids:
            existing.append(object_id)
        else:
            not_found.append(object_id)
    return existing, not_found


def find_slide(
    document: Document,
    slide_index: Optional[int] = None,
    slide_id: Optional[str] = None
) -> Tuple[str, int]:
    """
    Resolve a slide reference to (slide_id, 1-based index).

    The ID wins when both are given.

    Raises:
        NotFoundError: SLIDE_NOT_FOUND when the reference matches no slide
    """
    if slide_id:
        for position, slide in enumerate(document.slides, start=1):
            if slide.object_id == slide_id:
                return slide.object_id, position
        raise NotFoundError(f"slide '{slide_id}' not found", kind=ErrorKind.SLIDE_NOT_FOUND)

    if slide_index is not None and 1 <= slide_index <= len(document.slides):
        return document.slides[slide_index - 1].object_id, slide_index

    raise NotFoundError(
        f"slide index {slide_index} out of range (presentation has {len(document.slides)} slides)",
        kind=ErrorKind.SLIDE_NOT_FOUND
    )
