"""Pydantic models and data schemas."""

from .schemas import (
    DEFAULT_MODEL,
    SUPPORTED_MODELS,
    ErrorKind,
    ErrorResponse,
    ExtractionRequest,
    ExtractionResult,
)

__all__ = [
    "DEFAULT_MODEL",
    "SUPPORTED_MODELS",
    "ErrorKind",
    "ErrorResponse",
    "ExtractionRequest",
    "ExtractionResult",
]
