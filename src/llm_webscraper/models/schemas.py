"""Pydantic models for LLM WebScraper data structures."""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MODEL = "gpt-4o-mini"

# Models offered by the scraper form, mapped to their display labels
SUPPORTED_MODELS: Dict[str, str] = {
    "gpt-4o-mini": "GPT-4o Mini",
    "gpt-4o": "GPT-4o",
    "gpt-4": "GPT-4",
    "gpt-3.5-turbo": "GPT-3.5",
}


class ErrorKind(str, Enum):
    """Category of a failed extraction."""
    VALIDATION = "validation_error"  # Caller's fault, no I/O attempted
    FETCH = "fetch_error"            # Page could not be retrieved
    COMPLETION = "completion_error"  # Provider failed or returned nothing


class ExtractionRequest(BaseModel):
    """Request to extract fields from a web page."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    url: str = Field(..., min_length=1, description="Page to fetch")
    fields: List[str] = Field(..., min_length=1, description="Names of the fields to extract, in order")
    model: str = Field(..., min_length=1, description="Completion model identifier")
    api_key: str = Field(..., min_length=1, alias="apiKey", repr=False, description="Provider credential")

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, v):
        """Reject blank field names."""
        cleaned = [field.strip() for field in v]
        if any(not field for field in cleaned):
            raise ValueError("Field names cannot be empty")
        return cleaned


class ExtractionResult(BaseModel):
    """Extracted text plus the usage estimate for producing it."""

    model_config = ConfigDict(populate_by_name=True)

    extracted_text: str = Field(..., alias="result", description="Text returned by the model")
    input_tokens: int = Field(..., ge=0, alias="inputTokens", description="Whitespace tokens in the prompt")
    output_tokens: int = Field(..., ge=0, alias="outputTokens", description="Whitespace tokens in the result")
    total_cost: float = Field(..., ge=0, alias="totalCost", description="Estimated cost in USD")


class ErrorResponse(BaseModel):
    """Standardized error response for API."""
    error: str = Field(..., description="Human-readable error message")
