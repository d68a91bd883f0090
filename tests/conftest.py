"""Shared fixtures for LLM WebScraper tests."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from llm_webscraper.core import FieldExtractor

SAMPLE_HTML = """
<html>
    <head>
        <title>Example Product</title>
        <style>body { color: red; }</style>
    </head>
    <body>
        <h1>Blue Widget</h1>
        <script>trackPageView();</script>
        <p>Price: $19.99</p>
    </body>
</html>
"""


def make_completion_response(content):
    """Build an object shaped like an openai chat completion response."""
    message = SimpleNamespace(role="assistant", content=content)
    return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


def make_openai_client(response=None, error=None):
    """Build a fake AsyncOpenAI client usable as an async context manager."""
    client = MagicMock()
    client.__aenter__.return_value = client
    client.__aexit__.return_value = False
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        client.chat.completions.create = AsyncMock(return_value=response)
    return client


@pytest.fixture
def fake_fetcher():
    """Page fetcher returning SAMPLE_HTML."""
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=SAMPLE_HTML)
    fetcher.close = AsyncMock()
    return fetcher


@pytest.fixture
def fake_completion():
    """Completion client returning a short answer."""
    completion = MagicMock()
    completion.complete = AsyncMock(return_value="title: Blue Widget\nprice: $19.99")
    return completion


@pytest.fixture
def extractor(fake_fetcher, fake_completion):
    """Extractor wired to fake collaborators."""
    return FieldExtractor(fetcher=fake_fetcher, completion_client=fake_completion)


@pytest.fixture
def valid_payload():
    """Wire-format request body."""
    return {
        "url": "https://example.com",
        "fields": ["title", "price"],
        "model": "gpt-4o-mini",
        "apiKey": "sk-test",
    }
