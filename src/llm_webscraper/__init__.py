"""
LLM WebScraper - fetch a page and let a language model extract fields from it.

Fetches a URL, reduces its HTML to plain text, asks a chat-completion model to
extract the requested fields and reports a rough token/cost estimate. Exposed
as a REST API, a command-line tool and an MCP server.
"""

__version__ = "0.1.0"

# Make configuration easily accessible
from .config import get_settings

__all__ = ["get_settings"]
