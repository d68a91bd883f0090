"""Extraction request handling: fetch, reduce, prompt, complete, estimate."""

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..config import AppSettings, get_settings
from ..models.schemas import ExtractionRequest, ExtractionResult
from .completion import CompletionClient
from .error_handling import CompletionError, ErrorClassifier, InvalidRequestError
from .fetcher import PageFetcher
from .prompts import build_prompt, estimate_usage
from .text import html_to_text, truncate_text

logger = logging.getLogger(__name__)


def validate_request(data: Any) -> ExtractionRequest:
    """
    Validate a raw request payload.

    Accepts an ExtractionRequest or a mapping using either the wire names
    (``apiKey``) or the attribute names (``api_key``).

    Raises:
        InvalidRequestError: If a parameter is missing, empty or ill-typed
    """
    if isinstance(data, ExtractionRequest):
        return data
    if not isinstance(data, Mapping):
        raise InvalidRequestError()

    try:
        return ExtractionRequest.model_validate(dict(data))
    except ValidationError as e:
        raise InvalidRequestError(
            ErrorClassifier.describe_validation_errors(e.errors()),
            original_error=e,
        ) from e


class FieldExtractor:
    """Extracts named fields from a web page with a language model."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        completion_client: Optional[CompletionClient] = None,
    ):
        """
        Initialize the extractor.

        Args:
            fetcher: Page fetcher (a default PageFetcher if omitted)
            completion_client: Completion client (a default CompletionClient if omitted)
        """
        self.fetcher = fetcher or PageFetcher()
        self.completion_client = completion_client or CompletionClient()

    async def extract(self, request: Any) -> ExtractionResult:
        """
        Run one extraction request.

        Args:
            request: ExtractionRequest or raw payload mapping

        Returns:
            Extracted text with token counts and estimated cost

        Raises:
            InvalidRequestError: Parameters missing; no network I/O was done
            FetchError: The page could not be retrieved
            CompletionError: The provider failed or returned no content
        """
        request = validate_request(request)
        logger.info(f"Extracting {len(request.fields)} field(s) from {request.url} with {request.model}")

        html = await self.fetcher.fetch(request.url)
        text = truncate_text(html_to_text(html))
        prompt = build_prompt(request.fields, text)

        try:
            result = await self.completion_client.complete(request.model, request.api_key, prompt)
        except CompletionError as e:
            e.url = request.url
            raise

        if not result:
            raise CompletionError(url=request.url)

        input_tokens, output_tokens, total_cost = estimate_usage(prompt, result)
        logger.info(
            f"Extraction from {request.url} complete: "
            f"{input_tokens} input / {output_tokens} output tokens, ${total_cost:.4f}"
        )

        return ExtractionResult(
            extracted_text=result,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_cost=total_cost,
        )

    async def close(self) -> None:
        """Clean up resources."""
        await self.fetcher.close()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def create_extractor(settings: Optional[AppSettings] = None) -> FieldExtractor:
    """Build a FieldExtractor from application settings."""
    if settings is None:
        settings = get_settings()

    return FieldExtractor(
        fetcher=PageFetcher(**settings.get_fetcher_config()),
        completion_client=CompletionClient(**settings.get_completion_config()),
    )
