"""
Presentation translation via Cloud Translation.
"""

from typing import List, Optional

from pydantic import Field

from slides_mcp.core.document import Document
from slides_mcp.core.request_builders import build_replace_text_requests
from slides_mcp.core.text_search import (
    SPEAKER_NOTES_PREFIX,
    TextUnit,
    iter_slide_text_units,
    iter_text_units,
)
from slides_mcp.core.tree_walker import find_element_by_id, find_slide
from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.utils.exceptions import (
    ErrorKind,
    NotFoundError,
    OperationError,
    classify_api_error,
)
from slides_mcp.utils.validators import (
    validate_presentation_id,
    validate_required,
    validate_scope,
    validate_slide_reference,
)


class TranslatePresentationInput(ToolInput):
    """Input schema for translate_presentation tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    target_language: str = Field(description="ISO 639-1 target language code, e.g. 'fr', 'es', 'ja'")
    source_language: Optional[str] = Field(default=None, description="Source language; auto-detected if omitted")
    scope: str = Field(default="all", description="'all', 'slide' or 'object'")
    slide_index: Optional[int] = Field(default=None, description="1-based slide index, for scope='slide'")
    slide_id: Optional[str] = Field(default=None, description="Slide ID, for scope='slide'")
    object_id: Optional[str] = Field(default=None, description="Object ID, for scope='object'")


class TranslatedElement(ToolOutput):
    slide_index: int
    object_id: str
    object_type: str
    original_text: str
    translated_text: str


class TranslatePresentationOutput(ToolOutput):
    presentation_id: str
    target_language: str
    source_language: str
    translated_count: int
    affected_slides: List[int]
    translated_elements: List[TranslatedElement] = Field(default_factory=list)


def _object_units(document: Document, object_id: str) -> List[TextUnit]:
    """Text units of one object, looked up on slides and their notes pages."""
    for slide_index, slide in enumerate(document.slides, start=1):
        element = find_element_by_id(slide.elements, object_id)
        if element is not None:
            return list(iter_text_units([element], slide_index))
        if slide.notes_page is not None:
            element = find_element_by_id(slide.notes_page.elements, object_id)
            if element is not None:
                units = list(iter_text_units([element], slide_index))
                for unit in units:
                    unit.object_type = SPEAKER_NOTES_PREFIX + unit.object_type
                return units
    raise NotFoundError(f"object '{object_id}' not found in presentation")


class TranslatePresentationTool(SlidesTool):
    """Tool for translating the text of a presentation in place."""

    name = "translate_presentation"
    description = """
    Translate text in a presentation in place: shapes, grouped shapes, table cells
    and speaker notes. Text whose translation is unchanged is left alone.

    Input:
    - presentation_id: Presentation ID or URL
    - target_language: Language code such as 'fr', 'es', 'de', 'ja'
    - source_language: Optional; auto-detected if omitted
    - scope: 'all' (default), 'slide' (with slide_index or slide_id) or 'object' (with object_id)
    """
    args_schema = TranslatePresentationInput

    def _collect_units(
        self,
        document: Document,
        scope: str,
        slide_index: Optional[int],
        slide_id: Optional[str],
        object_id: Optional[str]
    ) -> List[TextUnit]:
        if scope == "object":
            units = _object_units(document, object_id)
        elif scope == "slide":
            _, position = find_slide(document, slide_index, slide_id)
            units = list(iter_slide_text_units(document.slides[position - 1], position))
        else:
            units = []
            for position, slide in enumerate(document.slides, start=1):
                units.extend(iter_slide_text_units(slide, position))
        return [unit for unit in units if unit.text.strip()]

    def run(self, tool_input: TranslatePresentationInput) -> TranslatePresentationOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        target_language = validate_required(
            tool_input.target_language, "target_language", ErrorKind.INVALID_TARGET_LANGUAGE
        )
        source_language = tool_input.source_language.strip() if tool_input.source_language else None
        scope = validate_scope(tool_input.scope)

        slide_index, slide_id, object_id = None, None, None
        if scope == "slide":
            slide_index, slide_id = validate_slide_reference(tool_input.slide_index, tool_input.slide_id)
        elif scope == "object":
            object_id = validate_required(tool_input.object_id, "object_id", ErrorKind.INVALID_OBJECT_ID)

        self.log_info(
            "Translating presentation",
            presentation_id=presentation_id,
            target_language=target_language,
            source_language=source_language,
            scope=scope,
        )

        document = self.fetch_document(presentation_id)
        units = self._collect_units(document, scope, slide_index, slide_id, object_id)
        if not units:
            raise OperationError(
                "no translatable text found in the specified scope",
                kind=ErrorKind.NO_TEXT_TO_TRANSLATE
            )

        try:
            batch = self.services.translate.translate_texts(
                [unit.text for unit in units], target_language, source_language
            )
        except Exception as e:
            raise classify_api_error(
                e,
                failure_kind=ErrorKind.TRANSLATE_FAILED,
                context="translation API error"
            ) from e

        if len(batch.texts) != len(units):
            raise OperationError(
                f"translation count mismatch: sent {len(units)}, received {len(batch.texts)}",
                kind=ErrorKind.TRANSLATE_FAILED
            )

        requests = []
        translated = []
        for unit, translated_text in zip(units, batch.texts):
            if not translated_text or translated_text == unit.text:
                continue
            requests.extend(build_replace_text_requests(unit.object_id, translated_text, unit.cell_location))
            translated.append(TranslatedElement(
                slide_index=unit.slide_index,
                object_id=unit.display_id,
                object_type=unit.object_type,
                original_text=unit.text,
                translated_text=translated_text,
            ))

        if not requests:
            raise OperationError(
                "no text was translated (all texts unchanged or empty)",
                kind=ErrorKind.NO_TEXT_TO_TRANSLATE
            )

        self.submit_batch(presentation_id, requests, ErrorKind.TRANSLATE_FAILED)

        affected_slides = sorted({element.slide_index for element in translated})
        self.log_info(
            "Translation completed",
            presentation_id=presentation_id,
            translated_count=len(translated),
            affected_slides=len(affected_slides),
        )
        return TranslatePresentationOutput(
            presentation_id=presentation_id,
            target_language=target_language,
            source_language=source_language or batch.detected_source_language or "auto-detected",
            translated_count=len(translated),
            affected_slides=affected_slides,
            translated_elements=translated,
        )
