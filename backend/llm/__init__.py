"""LLM providers used by the message classifier."""

from llm.base import BaseLLM, LLMError
from llm.openai import OpenAILLM

_PROVIDERS: dict[str, type[BaseLLM]] = {
    "openai": OpenAILLM,
}


def get_llm(provider: str = "openai", **kwargs) -> BaseLLM:
    """Build the LLM configured by LLM_PROVIDER.

    Args:
        provider: Provider name ("openai").
        **kwargs: Model, credential and timeout settings for the provider.

    Raises:
        ValueError: If no provider has that name.
    """
    try:
        llm_class = _PROVIDERS[provider]
    except KeyError:
        available = ", ".join(_PROVIDERS)
        raise ValueError(f"Unknown LLM provider: {provider}. Available: {available}") from None
    return llm_class(**kwargs)


__all__ = ["BaseLLM", "LLMError", "OpenAILLM", "get_llm"]
