"""
Comment listing via the Drive comments API.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from slides_mcp.tools.base import SlidesTool, ToolInput, ToolOutput
from slides_mcp.utils.exceptions import ErrorKind, classify_api_error
from slides_mcp.utils.validators import validate_presentation_id


class ListCommentsInput(ToolInput):
    """Input schema for list_comments tool."""

    presentation_id: str = Field(description="Presentation ID or URL")
    include_resolved: bool = Field(default=False, description="Include resolved comments")


class AuthorInfo(ToolOutput):
    display_name: str = ""
    email_address: Optional[str] = None
    photo_link: Optional[str] = None


class ReplyInfo(ToolOutput):
    reply_id: str
    author: AuthorInfo
    content: str = ""
    html_content: Optional[str] = None
    created_time: str = ""
    modified_time: Optional[str] = None
    deleted: bool = False


class CommentInfo(ToolOutput):
    comment_id: str
    author: AuthorInfo
    content: str = ""
    html_content: Optional[str] = None
    anchor_info: Optional[str] = None
    replies: List[ReplyInfo] = Field(default_factory=list)
    resolved: bool = False
    deleted: bool = False
    created_time: str = ""
    modified_time: Optional[str] = None


class ListCommentsOutput(ToolOutput):
    presentation_id: str
    comments: List[CommentInfo]
    total_count: int
    unresolved_count: int
    resolved_count: int


def _author(data: Optional[Dict[str, Any]]) -> AuthorInfo:
    data = data or {}
    return AuthorInfo(
        display_name=data.get("displayName", ""),
        email_address=data.get("emailAddress"),
        photo_link=data.get("photoLink"),
    )


def _reply(data: Dict[str, Any]) -> ReplyInfo:
    return ReplyInfo(
        reply_id=data.get("id", ""),
        author=_author(data.get("author")),
        content=data.get("content", ""),
        html_content=data.get("htmlContent"),
        created_time=data.get("createdTime", ""),
        modified_time=data.get("modifiedTime"),
        deleted=data.get("deleted", False),
    )


def _comment(data: Dict[str, Any]) -> CommentInfo:
    return CommentInfo(
        comment_id=data.get("id", ""),
        author=_author(data.get("author")),
        content=data.get("content", ""),
        html_content=data.get("htmlContent"),
        anchor_info=data.get("anchor"),
        replies=[_reply(reply) for reply in data.get("replies", []) or [] if reply],
        resolved=data.get("resolved", False),
        deleted=data.get("deleted", False),
        created_time=data.get("createdTime", ""),
        modified_time=data.get("modifiedTime"),
    )


class ListCommentsTool(SlidesTool):
    """Tool for listing the comments on a presentation."""

    name = "list_comments"
    description = """
    List the comments on a presentation, with authors and replies. Resolved
    comments are skipped unless include_resolved is true.

    Input:
    - presentation_id: Presentation ID or URL
    - include_resolved: Default false
    """
    args_schema = ListCommentsInput

    def run(self, tool_input: ListCommentsInput) -> ListCommentsOutput:
        presentation_id = validate_presentation_id(tool_input.presentation_id)

        self.log_info(
            "Listing comments",
            presentation_id=presentation_id,
            include_resolved=tool_input.include_resolved,
        )

        comments: List[CommentInfo] = []
        page_token = None
        while True:
            try:
                page = self.services.drive.list_comments(
                    presentation_id,
                    include_deleted=False,
                    page_size=self.config.comments_page_size,
                    page_token=page_token,
                )
            except Exception as e:
                raise classify_api_error(
                    e,
                    failure_kind=ErrorKind.LIST_COMMENTS_FAILED,
                    context="failed to list comments"
                ) from e

            for data in page.get("comments", []) or []:
                if not data:
                    continue
                if data.get("resolved", False) and not tool_input.include_resolved:
                    continue
                comments.append(_comment(data))

            page_token = page.get("nextPageToken")
            if not page_token:
                break

        resolved_count = sum(1 for comment in comments if comment.resolved)

        self.log_info(
            "Comments listed successfully",
            presentation_id=presentation_id,
            total_count=len(comments),
            resolved_count=resolved_count,
        )
        return ListCommentsOutput(
            presentation_id=presentation_id,
            comments=comments,
            total_count=len(comments),
            unresolved_count=len(comments) - resolved_count,
            resolved_count=resolved_count,
        )
