"""Tests for the MCP server tools."""

import importlib
import json

import pytest
from unittest.mock import patch

from llm_webscraper import mcp_server
from llm_webscraper.core import CompletionError


@pytest.fixture
def patched_extractor(extractor):
    """Make the MCP tool build the fake extractor."""
    with patch.object(mcp_server, "create_extractor", return_value=extractor):
        yield extractor


class TestExtractFieldsTool:
    """Test the extract_fields tool."""

    @pytest.mark.asyncio
    async def test_extract_fields(self, patched_extractor, fake_completion):
        """The tool returns the answer with usage figures."""
        result = await mcp_server.extract_fields(
            url="https://example.com",
            fields=["title", "price"],
            api_key="sk-test",
            model="gpt-4o",
        )

        assert result.url == "https://example.com"
        assert result.fields == ["title", "price"]
        assert result.result == "title: Blue Widget\nprice: $19.99"
        assert result.output_tokens == 5
        assert result.total_cost > 0
        assert fake_completion.complete.call_args.args[0] == "gpt-4o"

    @pytest.mark.asyncio
    async def test_default_model_from_settings(self, patched_extractor, fake_completion):
        """Omitting the model uses the configured default."""
        await mcp_server.extract_fields(
            url="https://example.com",
            fields=["title"],
            api_key="sk-test",
        )

        model = fake_completion.complete.call_args.args[0]
        assert model == mcp_server.get_settings().default_model

    @pytest.mark.asyncio
    async def test_failure_raises_runtime_error(self, patched_extractor, fake_completion):
        """Extraction failures surface as tool errors."""
        fake_completion.complete.side_effect = CompletionError()

        with pytest.raises(RuntimeError, match="No result from OpenAI"):
            await mcp_server.extract_fields(
                url="https://example.com",
                fields=["title"],
                api_key="sk-test",
            )

    @pytest.mark.asyncio
    async def test_missing_parameters(self, patched_extractor, fake_fetcher):
        """Empty inputs are rejected without fetching."""
        with pytest.raises(RuntimeError, match="Missing required parameters"):
            await mcp_server.extract_fields(url="", fields=["title"], api_key="sk-test")

        fake_fetcher.fetch.assert_not_called()


class TestConfigResource:
    """Test the configuration resource."""

    def test_config_resource(self):
        """Configuration is exposed without secrets."""
        config = json.loads(mcp_server.get_webscraper_config())

        assert set(config) == {"server", "fetcher", "completion", "default_model", "models"}
        assert "gpt-4o-mini" in config["models"]

    def test_logging_uses_configured_level(self):
        """The server configures logging with the LOG_LEVEL setting."""
        with patch("logging.basicConfig") as mock_config:
            importlib.reload(mcp_server)

        assert mock_config.call_args.kwargs["level"] == mcp_server.get_settings().log_level


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
