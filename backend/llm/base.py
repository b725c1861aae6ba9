"""Base LLM protocol for extensibility."""

from abc import ABC, abstractmethod
from typing import Any


class LLMError(Exception):
    """Raised when an LLM call fails or returns unusable output."""


class BaseLLM(ABC):
    """Abstract base class for LLM providers.

    Implement this to add support for new LLM providers (Anthropic, local, etc.).
    Every failure (transport, HTTP status, empty or non-JSON output) must be
    raised as ``LLMError`` so callers only have one exception type to absorb.

    Example:
        class AnthropicLLM(BaseLLM):
            def __init__(self, model: str = "claude-3-haiku"):
                self.model = model
                self.client = Anthropic()

            async def complete(
                self,
                prompt: str,
                schema: dict | None = None,
                *,
                system: str | None = None,
                schema_name: str = "response",
            ) -> dict:
                # Implementation here
                ...
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model name being used."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        schema: dict[str, Any] | None = None,
        *,
        system: str | None = None,
        schema_name: str = "response",
    ) -> dict[str, Any]:
        """Generate a completion for the given prompt.

        Args:
            prompt: The user content to send to the LLM.
            schema: Optional JSON schema for structured output.
                   If provided, the LLM should return data matching this schema.
            system: Optional system instruction sent ahead of the prompt.
            schema_name: Name of the structured output format.

        Returns:
            A dictionary containing the LLM's response.
            If schema was provided, response will match the schema.

        Raises:
            LLMError: If the call fails or the output cannot be parsed.
        """
