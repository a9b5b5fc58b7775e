"""Domain exceptions for the portfolio builder."""

from typing import List, Optional


class PortfolioError(Exception):
    """Base class for every error raised by the portfolio builder."""

    title = "Error"

    def __init__(self, message: str, title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if title:
            self.title = title


class ValidationError(PortfolioError):
    """Bad user input, rejected before any AI call."""

    title = "Validation Error"


class UploadTooLargeError(ValidationError):
    """Uploaded file exceeds the size limit."""


class ExtractionError(PortfolioError):
    """CV parsing failed; no partial record is available."""

    title = "CV Parsing Failed"


class RecommendationError(PortfolioError):
    """Theme recommendation failed."""

    title = "Theme Recommendation Failed"


class ThemeGenerationError(PortfolioError):
    """Custom theme generation failed."""

    title = "Theme Generation Failed"


class RewriteError(PortfolioError):
    """Content rewrite failed; existing content must be left untouched."""

    title = "AI Rewrite Failed"


class StorageCorruptionError(PortfolioError):
    """A persisted value could not be parsed back."""

    title = "Storage Corrupted"

    def __init__(self, key: str, message: str):
        super().__init__(f"Stored value for '{key}' is unreadable: {message}")
        self.key = key


class FieldUpdateError(PortfolioError):
    """A dotted-path update does not fit the CV record."""

    title = "Update Failed"


class NoCvRecordError(FieldUpdateError):
    """A field update was requested before any CV was loaded."""


class LLMServiceError(PortfolioError):
    """
    Failure reported by the generative model API.

    Carries the pieces of the failure cause that the API exposes, so callers
    can build a readable message from them.
    """

    title = "AI Service Error"

    def __init__(
        self,
        message: str,
        finish_reason: Optional[str] = None,
        blocked_categories: Optional[List[str]] = None,
        details: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.finish_reason = finish_reason
        self.blocked_categories = blocked_categories or []
        self.details = details or []


class LLMTimeoutError(LLMServiceError):
    """The model API did not answer within the configured timeout."""
