"""Core extraction functionality and utilities."""

from .completion import CompletionClient
from .error_handling import (
    CompletionError,
    ErrorClassifier,
    ExtractionError,
    FetchError,
    InvalidRequestError,
)
from .extractor import FieldExtractor, create_extractor, validate_request
from .fetcher import PageFetcher
from .prompts import COST_PER_TOKEN, build_prompt, count_tokens, estimate_usage
from .text import MAX_TEXT_CHARS, html_to_text, truncate_text

__all__ = [
    # Request handling
    "FieldExtractor",
    "create_extractor",
    "validate_request",

    # Collaborators
    "PageFetcher",
    "CompletionClient",
    "html_to_text",
    "truncate_text",
    "MAX_TEXT_CHARS",
    "build_prompt",
    "count_tokens",
    "estimate_usage",
    "COST_PER_TOKEN",

    # Error handling
    "ErrorClassifier",
    "ExtractionError",
    "InvalidRequestError",
    "FetchError",
    "CompletionError",
]
