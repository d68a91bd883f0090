"""Prompt construction and usage estimation."""

import re
from typing import Sequence, Tuple

# Flat per-token price used for the cost estimate
COST_PER_TOKEN = 0.00002

EXTRACTION_PROMPT = "Extract the following information from the given text: {fields}.\nText: {text}"

_WHITESPACE = re.compile(r"\s+")


def build_prompt(fields: Sequence[str], text: str) -> str:
    """Build the extraction prompt for the given field names and page text."""
    return EXTRACTION_PROMPT.format(fields=", ".join(fields), text=text)


def count_tokens(text: str) -> int:
    """
    Count whitespace-delimited tokens.

    This is a rough stand-in for model tokenization. Splitting keeps the empty
    pieces that leading or trailing whitespace produce, so an empty string
    counts as one token.
    """
    return len(_WHITESPACE.split(text))


def estimate_usage(prompt: str, result: str) -> Tuple[int, int, float]:
    """Return ``(input_tokens, output_tokens, total_cost)`` for a prompt/result pair."""
    input_tokens = count_tokens(prompt)
    output_tokens = count_tokens(result)
    cost = (input_tokens + output_tokens) * COST_PER_TOKEN
    return input_tokens, output_tokens, cost
