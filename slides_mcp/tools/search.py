"""
Text search across a presentation.
"""

from typing import List, Optional

from pydantic import Field

from slides_mcp.core.text_search import search_slide
from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.utils.validators import validate_context_chars, validate_presentation_id, validate_query


class SearchTextInput(ToolInput):
    """Input schema for search_text tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    query: str = Field(description="Text to search for")
    case_sensitive: bool = Field(default=False, description="Match case exactly")
    context_chars: Optional[int] = Field(
        default=None,
        description="Characters of surrounding text returned on each side of a match"
    )


class TextMatchResult(ToolOutput):
    object_id: str
    object_type: str
    start_index: int
    text_context: str


class SlideSearchResult(ToolOutput):
    slide_index: int
    slide_id: str
    matches: List[TextMatchResult]


class SearchTextOutput(ToolOutput):
    presentation_id: str
    query: str
    case_sensitive: bool
    total_matches: int
    results: List[SlideSearchResult]


class SearchTextTool(SlidesTool):
    """Tool for finding text across slides, tables and speaker notes."""

    name = "search_text"
    description = """
    Search for text across all slides: shapes (including grouped shapes), table
    cells and speaker notes. Overlapping matches are all reported. Results are
    grouped by slide, each match with surrounding context.

    Input:
    - presentation_id: Presentation ID or URL
    - query: Text to find
    - case_sensitive: Default false
    - context_chars: Context radius (default from configuration, 50)
    """
    args_schema = SearchTextInput

    def run(self, tool_input: SearchTextInput) -> SearchTextOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)
        query = validate_query(tool_input.query)
        context_chars = tool_input.context_chars
        if context_chars is None:
            context_chars = self.config.search_context_chars
        validate_context_chars(context_chars)

        self.log_info(
            "Searching text in presentation",
            presentation_id=presentation_id,
            query=query,
            case_sensitive=tool_input.case_sensitive,
        )

        document = self.fetch_document(presentation_id)

        results = []
        total_matches = 0
        for slide_index, slide in enumerate(document.slides, start=1):
            matches = search_slide(slide, slide_index, query, tool_input.case_sensitive, context_chars)
            if not matches:
                continue
            results.append(SlideSearchResult(
                slide_index=slide_index,
                slide_id=slide.object_id,
                matches=[
                    TextMatchResult(
                        object_id=match.object_id,
                        object_type=match.object_type,
                        start_index=match.start_index,
                        text_context=match.text_context,
                    )
                    for match in matches
                ],
            ))
            total_matches += len(matches)

        self.log_info(
            "Text search completed",
            presentation_id=presentation_id,
            total_matches=total_matches,
            slides_with_matches=len(results),
        )
        return SearchTextOutput(
            presentation_id=presentation_id,
            query=query,
            case_sensitive=tool_input.case_sensitive,
            total_matches=total_matches,
            results=results,
        )
