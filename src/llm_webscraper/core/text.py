"""HTML to plain-text reduction."""

from bs4 import BeautifulSoup

# Hard cap on page text sent to the completion provider
MAX_TEXT_CHARS = 3000

# Elements whose contents are never visible text
NON_TEXT_TAGS = ["script", "style", "noscript", "template"]


def html_to_text(html: str) -> str:
    """
    Reduce an HTML document to the visible text of its body.

    Head content, scripts and styles are dropped, as are document structure,
    links and attributes. Surrounding whitespace is trimmed; inner whitespace
    is kept as-is. A document without a body yields an empty string.
    """
    soup = BeautifulSoup(html, "lxml")
    body = soup.body
    if body is None:
        return ""

    for element in body.find_all(NON_TEXT_TAGS):
        element.decompose()

    return body.get_text().strip()


def truncate_text(text: str, limit: int = MAX_TEXT_CHARS) -> str:
    """Return at most the first ``limit`` characters of ``text``."""
    return text[:limit]
