"""Error taxonomy for extraction requests and classification of library errors."""

import logging
from typing import Any, Dict, Iterable, Optional

import httpx
import openai

from ..models.schemas import ErrorKind

logger = logging.getLogger(__name__)

FETCH_ERROR_PREFIX = "Error fetching webpage: "
MISSING_PARAMETERS_MESSAGE = "Missing required parameters"
NO_RESULT_MESSAGE = "No result from OpenAI"
GENERIC_ERROR_MESSAGE = "An error occurred while scraping"

# Pydantic error types that mean a parameter is absent or empty
MISSING_ERROR_TYPES = {"missing", "string_too_short", "too_short", "value_error"}

_NO_INPUT = object()

HTTP_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.FETCH: 500,
    ErrorKind.COMPLETION: 500,
}


class ExtractionError(Exception):
    """Base exception for a failed extraction request."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize extraction error.

        Args:
            message: Human-readable error message
            kind: Which stage of the request failed
            url: URL being processed when the error occurred
            original_error: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.url = url
        self.original_error = original_error

    @property
    def status_code(self) -> int:
        """HTTP status used when this error crosses the API boundary."""
        return HTTP_STATUS_BY_KIND[self.kind]


class InvalidRequestError(ExtractionError):
    """Required request parameters are missing, empty or ill-typed."""

    def __init__(self, message: str = MISSING_PARAMETERS_MESSAGE, **kwargs):
        kwargs.setdefault("kind", ErrorKind.VALIDATION)
        super().__init__(message, **kwargs)


class FetchError(ExtractionError):
    """The target page could not be retrieved."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("kind", ErrorKind.FETCH)
        super().__init__(message, **kwargs)


class CompletionError(ExtractionError):
    """The completion provider failed or returned no usable content."""

    def __init__(self, message: str = NO_RESULT_MESSAGE, **kwargs):
        kwargs.setdefault("kind", ErrorKind.COMPLETION)
        super().__init__(message, **kwargs)


def _is_missing(error: Dict[str, Any]) -> bool:
    # A JSON null is treated like an absent parameter
    return error.get("type") in MISSING_ERROR_TYPES or error.get("input", _NO_INPUT) is None


def _detail(exception: Exception) -> str:
    # Some httpx timeouts carry an empty message
    return str(exception) or exception.__class__.__name__


class ErrorClassifier:
    """Classifies library exceptions into extraction error types."""

    @staticmethod
    def classify_fetch_error(exception: Exception, url: Optional[str] = None) -> FetchError:
        """
        Classify an exception raised while fetching a page.

        Args:
            exception: Original exception
            url: URL being fetched

        Returns:
            FetchError whose message starts with "Error fetching webpage: "
        """
        if isinstance(exception, FetchError):
            return exception

        if isinstance(exception, httpx.HTTPStatusError):
            detail = f"Request failed with status code {exception.response.status_code}"
        elif isinstance(exception, httpx.TimeoutException):
            detail = f"Request timeout: {_detail(exception)}"
        elif isinstance(exception, httpx.ConnectError):
            detail = f"Connection error: {_detail(exception)}"
        elif isinstance(exception, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
            detail = f"Invalid URL: {_detail(exception)}"
        else:
            detail = _detail(exception)

        return FetchError(
            f"{FETCH_ERROR_PREFIX}{detail}",
            url=url,
            original_error=exception,
        )

    @staticmethod
    def classify_completion_error(exception: Exception, url: Optional[str] = None) -> CompletionError:
        """
        Classify an exception raised by the completion provider.

        Args:
            exception: Original exception
            url: URL whose text was being processed

        Returns:
            CompletionError carrying the provider's message
        """
        if isinstance(exception, CompletionError):
            return exception

        if isinstance(exception, openai.APIStatusError):
            message = f"Completion provider returned {exception.status_code}: {exception.message}"
        elif isinstance(exception, openai.APIConnectionError):
            message = f"Could not reach completion provider: {exception.message}"
        elif isinstance(exception, openai.OpenAIError):
            message = _detail(exception)
        else:
            message = f"Unexpected completion failure: {_detail(exception)}"

        return CompletionError(message, url=url, original_error=exception)

    @staticmethod
    def describe_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
        """
        Summarize pydantic validation errors as a single client-facing message.

        Absent or empty parameters collapse to "Missing required parameters";
        anything else names the offending parameters.
        """
        errors = list(errors)
        if any(error.get("type") == "json_invalid" for error in errors):
            return "Invalid JSON body"
        if not errors or any(_is_missing(error) for error in errors):
            return MISSING_PARAMETERS_MESSAGE

        names = []
        for error in errors:
            loc = [str(part) for part in error.get("loc", ()) if part != "body"]
            name = loc[0] if loc else "body"
            if name not in names:
                names.append(name)
        return f"Invalid request parameters: {', '.join(names)}"
