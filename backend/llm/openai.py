"""OpenAI LLM provider."""

import json
import logging
import os
from typing import Any

import httpx

from llm.base import BaseLLM, LLMError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMPERATURE = 0.5
DEFAULT_TIMEOUT = 60.0
CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


class OpenAILLM(BaseLLM):
    """OpenAI LLM provider using the chat completions API.

    Supports structured outputs via JSON schema. A missing API key does not
    prevent construction; every call fails with ``LLMError`` instead.
    """

    def __init__(
        self,
        model: str | None = None,
        api_key: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the OpenAI LLM.

        Args:
            model: Model name to use. Defaults to LLM_MODEL env var or gpt-4o.
            api_key: OpenAI API key. Defaults to OPENAI_API_KEY env var.
            temperature: Sampling temperature. Defaults to 0.5.
            timeout: HTTP timeout in seconds. Defaults to 60.
            transport: Optional httpx transport, used by tests.
        """
        self._model = model or os.getenv("LLM_MODEL", DEFAULT_MODEL)
        self._api_key = api_key or os.getenv("OPENAI_API_KEY")
        self._temperature = DEFAULT_TEMPERATURE if temperature is None else temperature
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._transport = transport

        if not self._api_key:
            logger.warning(
                "OpenAI API key not provided. Set OPENAI_API_KEY environment variable; "
                "classification will fall back to default values."
            )

        logger.info("Initialized OpenAI LLM with model: %s", self._model)

    @property
    def model_name(self) -> str:
        """Return the model name being used."""
        return self._model

    async def complete(
        self,
        prompt: str,
        schema: dict[str, Any] | None = None,
        *,
        system: str | None = None,
        schema_name: str = "response",
    ) -> dict[str, Any]:
        """Generate a completion using OpenAI's API.

        Args:
            prompt: The user content to send to the LLM.
            schema: Optional JSON schema for structured output.
            system: Optional system instruction.
            schema_name: Name of the structured output format.

        Returns:
            A dictionary containing the LLM's response.

        Raises:
            LLMError: On a missing key, transport error, non-2xx status or
                unparseable output.
        """
        if not self._api_key:
            raise LLMError("OpenAI API key not configured")

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload: dict[str, Any] = {
            "model": self._model,
            "temperature": self._temperature,
            "messages": messages,
        }

        # Use structured output if schema provided
        if schema:
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                },
            }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    CHAT_COMPLETIONS_URL,
                    headers=headers,
                    json=payload,
                    timeout=self._timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise LLMError(
                f"OpenAI error [{e.response.status_code}]: {e.response.text[:500]}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise LLMError(f"OpenAI request failed: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError("OpenAI response contained no choices") from e

        if not content:
            raise LLMError("OpenAI response was empty")

        # Parse JSON if schema was provided
        if schema:
            try:
                parsed = json.loads(content)
            except json.JSONDecodeError as e:
                logger.error("Failed to parse LLM response as JSON: %s", e)
                raise LLMError("Failed to parse response") from e
            if not isinstance(parsed, dict):
                raise LLMError("Structured response was not a JSON object")
            return parsed

        return {"content": content}
