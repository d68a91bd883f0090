"""Chat-completion provider access."""

import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from .error_handling import ErrorClassifier

logger = logging.getLogger(__name__)


class CompletionClient:
    """Sends a single user message to an OpenAI-compatible chat completion API.

    The API key is supplied per call and only lives for the duration of that
    call; a fresh provider client is opened and closed every time.
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url

    def _create_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key, base_url=self.base_url)

    async def complete(self, model: str, api_key: str, prompt: str) -> Optional[str]:
        """
        Request a completion for ``prompt``.

        Returns:
            The content of the first choice, or None when the provider sent none

        Raises:
            CompletionError: If the provider call fails
        """
        logger.debug(f"Requesting completion from model {model} ({len(prompt)} prompt characters)")

        try:
            async with self._create_client(api_key) as client:
                response = await client.chat.completions.create(
                    model=model,
                    messages=[{"role": "user", "content": prompt}],
                )
        except OpenAIError as e:
            error = ErrorClassifier.classify_completion_error(e)
            logger.warning(f"Completion request failed: {error}")
            raise error from e

        if not response.choices:
            return None
        return response.choices[0].message.content
