"""MCP Server implementation for LLM WebScraper.

Exposes field extraction as an MCP tool for AI agent integration.
Uses stdio transport for editor integration.
"""

import json
import logging
from typing import List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from llm_webscraper.config import get_settings
from llm_webscraper.core import ExtractionError, create_extractor
from llm_webscraper.models.schemas import SUPPORTED_MODELS

# Configure logging
logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)

# Create MCP server
mcp = FastMCP("LLMWebScraper")


class ExtractFieldsResult(BaseModel):
    """Structured output for extract_fields tool."""
    url: str = Field(description="URL that was scraped")
    fields: List[str] = Field(description="Fields that were requested")
    result: str = Field(description="Text returned by the model")
    input_tokens: int = Field(description="Whitespace tokens in the prompt")
    output_tokens: int = Field(description="Whitespace tokens in the result")
    total_cost: float = Field(description="Estimated cost in USD")


@mcp.tool()
async def extract_fields(
    url: str,
    fields: List[str],
    api_key: str,
    model: Optional[str] = None,
) -> ExtractFieldsResult:
    """
    Fetch a web page and extract the named fields from its text with an OpenAI model.

    Args:
        url: The URL to scrape
        fields: Names of the pieces of information to extract (e.g., ["title", "price"])
        api_key: OpenAI API key used for this request only
        model: OpenAI model identifier (defaults to the DEFAULT_MODEL setting)

    Returns:
        The model's answer with token counts and estimated cost
    """
    logger.info(f"MCP tool extract_fields called: {url}")
    model = model or get_settings().default_model

    async with create_extractor() as extractor:
        try:
            result = await extractor.extract(
                {"url": url, "fields": fields, "model": model, "api_key": api_key}
            )
        except ExtractionError as e:
            raise RuntimeError(e.message) from e

    return ExtractFieldsResult(
        url=url,
        fields=fields,
        result=result.extracted_text,
        input_tokens=result.input_tokens,
        output_tokens=result.output_tokens,
        total_cost=result.total_cost,
    )


@mcp.resource("config://webscraper")
def get_webscraper_config() -> str:
    """Get the current LLM WebScraper configuration."""
    settings = get_settings()
    config = {
        "server": settings.get_server_config(),
        "fetcher": settings.get_fetcher_config(),
        "completion": settings.get_completion_config(),
        "default_model": settings.default_model,
        "models": list(SUPPORTED_MODELS),
    }
    return json.dumps(config, indent=2)


def main() -> None:
    """Run the MCP server with stdio transport."""
    mcp.run()


if __name__ == "__main__":
    main()
