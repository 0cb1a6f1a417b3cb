"""Custom exceptions for the templating context."""

from typing import List, Optional

GENERIC_RENDER_FAILURE = "Failed to generate LaTeX resume. Please check your data and try again."
GENERIC_PDF_FAILURE = "Failed to generate PDF. Please check your data and try again."


class VellumError(Exception):
    """Base class for all errors raised by vellum."""

    pass


class ResumeValidationError(VellumError, ValueError):
    """
    Exception raised when resume data is missing mandatory personal fields.

    Attributes:
        message: Error description
        missing_fields: Names of the mandatory fields that were absent
    """

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        self.message = message
        self.missing_fields = missing_fields or []
        super().__init__(message)


class TemplateNotFoundError(VellumError):
    """
    Exception raised when neither the standardized nor the original template exists.

    Attributes:
        template_id: Requested template identifier
        searched_paths: Locations that were tried, in lookup order
    """

    def __init__(self, template_id: str, searched_paths: Optional[List] = None):
        self.template_id = template_id
        self.searched_paths = searched_paths or []

        parts = [
            f"Template {template_id} not found - neither standardized nor original version exists"
        ]
        for path in self.searched_paths:
            parts.append(f"  Tried: {path}")

        super().__init__("\n".join(parts))


class EnhancementError(VellumError):
    """
    Exception raised when AI content enhancement fails.

    Never escapes the renderer: it is caught and rendering continues with the
    original resume data.

    Attributes:
        message: Error description
        original_error: The underlying provider or parsing error
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))


class RenderError(VellumError):
    """
    Exception raised for any unexpected failure while rendering.

    The message shown to callers is always generic; the underlying error is kept
    on original_error (and chained via __cause__) for logging only.

    Attributes:
        message: Caller-facing message
        template_id: Template being rendered
        original_error: The error that aborted the render
    """

    def __init__(
        self,
        message: str = GENERIC_RENDER_FAILURE,
        template_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_id = template_id
        self.original_error = original_error
        super().__init__(message)
