"""
Custom exception classes for the Google Slides tools.
Every error carries a stable kind (error_code) plus a human-readable message.
"""

import json
from enum import Enum
from typing import Optional, Dict, Any

from googleapiclient.errors import HttpError


class ErrorKind(str, Enum):
    """Stable, caller-visible error kinds."""
    # Invalid input
    INVALID_PRESENTATION_ID = "INVALID_PRESENTATION_ID"
    INVALID_SLIDE_REFERENCE = "INVALID_SLIDE_REFERENCE"
    INVALID_IMAGE_DATA = "INVALID_IMAGE_DATA"
    INVALID_SIZE = "INVALID_SIZE"
    INVALID_POSITION = "INVALID_POSITION"
    INVALID_CROP = "INVALID_CROP"
    INVALID_BRIGHTNESS = "INVALID_BRIGHTNESS"
    INVALID_CONTRAST = "INVALID_CONTRAST"
    INVALID_TRANSPARENCY = "INVALID_TRANSPARENCY"
    INVALID_RECOLOR = "INVALID_RECOLOR"
    INVALID_TIME = "INVALID_TIME"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    INVALID_TRANSITION_TYPE = "INVALID_TRANSITION_TYPE"
    INVALID_TRANSITION_DURATION = "INVALID_TRANSITION_DURATION"
    INVALID_QUERY = "INVALID_QUERY"
    INVALID_TITLE = "INVALID_TITLE"
    INVALID_SOURCE_ID = "INVALID_SOURCE_ID"
    INVALID_OBJECT_ID = "INVALID_OBJECT_ID"
    INVALID_TARGET_LANGUAGE = "INVALID_TARGET_LANGUAGE"
    INVALID_SCOPE = "INVALID_SCOPE"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    NO_PROPERTIES_TO_MODIFY = "NO_PROPERTIES_TO_MODIFY"
    NO_OBJECTS_SPECIFIED = "NO_OBJECTS_SPECIFIED"
    NOT_AN_IMAGE = "NOT_AN_IMAGE"
    NOT_A_VIDEO = "NOT_A_VIDEO"

    # Not found
    PRESENTATION_NOT_FOUND = "PRESENTATION_NOT_FOUND"
    SLIDE_NOT_FOUND = "SLIDE_NOT_FOUND"
    OBJECT_NOT_FOUND = "OBJECT_NOT_FOUND"
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"

    # Authorization / remote service
    ACCESS_DENIED = "ACCESS_DENIED"
    SERVICE_ERROR = "SERVICE_ERROR"
    OBJECT_STATE = "OBJECT_STATE"

    # Operation-specific failures
    UPLOAD_FAILED = "UPLOAD_FAILED"
    ADD_IMAGE_FAILED = "ADD_IMAGE_FAILED"
    REPLACE_IMAGE_FAILED = "REPLACE_IMAGE_FAILED"
    MODIFY_IMAGE_FAILED = "MODIFY_IMAGE_FAILED"
    MODIFY_VIDEO_FAILED = "MODIFY_VIDEO_FAILED"
    DELETE_FAILED = "DELETE_FAILED"
    CREATE_FAILED = "CREATE_FAILED"
    COPY_FAILED = "COPY_FAILED"
    EXPORT_FAILED = "EXPORT_FAILED"
    TRANSLATE_FAILED = "TRANSLATE_FAILED"
    NO_TEXT_TO_TRANSLATE = "NO_TEXT_TO_TRANSLATE"
    LIST_COMMENTS_FAILED = "LIST_COMMENTS_FAILED"
    TRANSITION_NOT_SUPPORTED = "TRANSITION_NOT_SUPPORTED"

    # Ambient
    AUTH_ERROR = "AUTH_ERROR"


class SlidesToolError(Exception):
    """Base exception for all Slides tool errors."""

    default_kind = ErrorKind.SERVICE_ERROR

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            kind: Stable error kind (defaults to the class kind)
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        self.details = details or {}

    @property
    def error_code(self) -> str:
        """Machine-readable error code."""
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        """Structured, caller-visible form of the error."""
        payload: Dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(SlidesToolError):
    """Raised when tool input fails validation. Always raised before any remote call."""

    default_kind = ErrorKind.INVALID_ARGUMENTS

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            kind: Error kind
            field: Name of invalid field
            value: Invalid value
            **kwargs: Additional arguments for SlidesToolError
        """
        super().__init__(message, kind=kind, **kwargs)
        self.field = field
        self.value = value


class NotFoundError(SlidesToolError):
    """Raised when a presentation, slide, object, source file or folder does not exist."""

    default_kind = ErrorKind.OBJECT_NOT_FOUND


class AccessDeniedError(SlidesToolError):
    """Raised on 403-class responses."""

    default_kind = ErrorKind.ACCESS_DENIED


class ServiceError(SlidesToolError):
    """Raised for unclassified upstream failures."""

    default_kind = ErrorKind.SERVICE_ERROR


class ObjectStateError(SlidesToolError):
    """Raised when the current object state cannot support the requested change."""

    default_kind = ErrorKind.OBJECT_STATE


class OperationError(SlidesToolError):
    """Raised when a specific tool operation fails remotely."""
    pass


class AuthenticationError(SlidesToolError):
    """Raised when OAuth credentials cannot be loaded or refreshed."""

    default_kind = ErrorKind.AUTH_ERROR


_NOT_FOUND_SIGNATURES = ("404", "notFound", "not found")
_FORBIDDEN_SIGNATURES = ("403", "forbidden", "access denied", "permission denied")
_PARENT_SIGNATURES = ("invalid parent", "parent not found")
_FOLDER_SIGNATURES = ("folder not found", "invalid folder")


def _error_status(exc: BaseException) -> Optional[int]:
    if isinstance(exc, HttpError):
        try:
            return int(exc.resp.status)
        except (AttributeError, TypeError, ValueError):
            return None
    return None


def is_not_found_error(exc: BaseException) -> bool:
    """Check whether an API error means the resource does not exist."""
    if _error_status(exc) == 404:
        return True
    text = str(exc)
    return any(signature in text for signature in _NOT_FOUND_SIGNATURES)


def is_forbidden_error(exc: BaseException) -> bool:
    """Check whether an API error means access was denied."""
    if _error_status(exc) == 403:
        return True
    text = str(exc)
    return any(signature in text for signature in _FORBIDDEN_SIGNATURES)


def is_parent_not_found_error(exc: BaseException) -> bool:
    """Only matches errors that explicitly mention the parent folder."""
    text = str(exc).lower()
    return any(signature in text for signature in _PARENT_SIGNATURES)


def is_folder_not_found_error(exc: BaseException) -> bool:
    text = str(exc).lower()
    return (
        is_not_found_error(exc)
        or is_parent_not_found_error(exc)
        or any(signature in text for signature in _FOLDER_SIGNATURES)
    )


def api_error_message(exc: BaseException) -> str:
    """Extract the upstream message, preferring the JSON error body of an HttpError."""
    if isinstance(exc, HttpError):
        try:
            return json.loads(exc.content.decode()).get("error", {}).get("message", str(exc))
        except (ValueError, AttributeError, UnicodeDecodeError):
            return str(exc)
    return str(exc)


def classify_api_error(
    exc: BaseException,
    failure_kind: ErrorKind = ErrorKind.SERVICE_ERROR,
    not_found_kind: ErrorKind = ErrorKind.PRESENTATION_NOT_FOUND,
    context: str = ""
) -> SlidesToolError:
    """
    Map a remote-call failure onto the domain error taxonomy.

    Not-found and forbidden signatures win; anything else falls through to the
    operation's failure kind. The original message is always kept.

    Args:
        exc: Exception raised by the remote call
        failure_kind: Kind for unclassified failures
        not_found_kind: Kind used when the error is a not-found response
        context: Optional prefix describing the failed step

    Returns:
        Domain error to raise (``raise classify_api_error(e) from e``)
    """
    message = api_error_message(exc)
    if context:
        message = f"{context}: {message}"

    if is_not_found_error(exc):
        return NotFoundError(message, kind=not_found_kind)
    if is_forbidden_error(exc):
        return AccessDeniedError(message)
    if failure_kind == ErrorKind.SERVICE_ERROR:
        return ServiceError(message)
    return OperationError(message, kind=failure_kind)
