"""FastAPI application exposing the field extraction endpoint."""

import logging
from typing import Any, AsyncIterator, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import get_settings
from ..core import ErrorClassifier, ExtractionError, FieldExtractor, create_extractor
from ..core.error_handling import GENERIC_ERROR_MESSAGE
from ..models.schemas import SUPPORTED_MODELS, ErrorResponse, ExtractionRequest, ExtractionResult

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="LLM WebScraper",
    description="Extract named fields from web pages with a language model",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


async def get_extractor() -> AsyncIterator[FieldExtractor]:
    """Provide a fresh extractor for each request."""
    extractor = create_extractor(get_settings())
    try:
        yield extractor
    finally:
        await extractor.close()


def error_response(status_code: int, message: str, headers: Dict[str, str] = None) -> JSONResponse:
    """Build the ``{"error": ...}`` body used for every failure."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


@app.get("/", response_model=Dict[str, Any])
async def root():
    """Root endpoint - API information."""
    return {
        "name": "LLM WebScraper",
        "version": __version__,
        "description": "Extract named fields from web pages with a language model",
        "endpoint": "/api/scrape",
        "models": list(SUPPORTED_MODELS),
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring and load balancers."""
    return {"status": "healthy", "version": __version__}


@app.post(
    "/api/scrape",
    response_model=ExtractionResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def scrape(request: ExtractionRequest, extractor: FieldExtractor = Depends(get_extractor)):
    """
    Fetch a page and extract the requested fields from its text.

    Returns the model's answer with whitespace-token counts and an estimated cost.
    """
    try:
        return await extractor.extract(request)
    except ExtractionError as e:
        logger.error(f"Error: {e}")
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected error while scraping {request.url}")
        return error_response(500, str(e) or GENERIC_ERROR_MESSAGE)


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report invalid request bodies as 400 with a single message."""
    message = ErrorClassifier.describe_validation_errors(exc.errors())
    logger.info(f"Rejected request to {request.url.path}: {message}")
    return error_response(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors in the ``{"error": ...}`` shape."""
    if exc.status_code == 405:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))
