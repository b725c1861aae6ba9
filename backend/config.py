"""Application settings loaded from environment variables."""

import logging
import os
from dataclasses import dataclass

from classify.classifier import DEFAULT_STAGE_TIMEOUT
from classify.pipeline import VARIANTS
from llm.openai import DEFAULT_MODEL, DEFAULT_TEMPERATURE, DEFAULT_TIMEOUT
from rows.store import DEFAULT_ROW_COUNT

logger = logging.getLogger(__name__)


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid value for %s: %r, using %s", name, raw, default)
        return default


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid value for %s: %r, using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Negative value for %s: %r, using %s", name, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Only the API key is a credential; without it the app still starts and
    every classification falls back to its default values.
    """

    openai_api_key: str | None
    llm_provider: str = "openai"
    llm_model: str = DEFAULT_MODEL
    llm_temperature: float = DEFAULT_TEMPERATURE
    llm_timeout: float = DEFAULT_TIMEOUT
    stage_timeout: float = DEFAULT_STAGE_TIMEOUT
    pipeline_variant: str = "staged"
    initial_rows: int = DEFAULT_ROW_COUNT

    @classmethod
    def from_env(cls) -> "Settings":
        variant = os.getenv("PIPELINE_VARIANT", "staged").strip().lower()
        if variant not in VARIANTS:
            logger.warning("Unknown PIPELINE_VARIANT %r, using staged", variant)
            variant = "staged"

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            llm_provider=os.getenv("LLM_PROVIDER", "openai"),
            llm_model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
            llm_temperature=_get_float("LLM_TEMPERATURE", DEFAULT_TEMPERATURE),
            llm_timeout=_get_float("LLM_TIMEOUT", DEFAULT_TIMEOUT),
            stage_timeout=_get_float("STAGE_TIMEOUT", DEFAULT_STAGE_TIMEOUT),
            pipeline_variant=variant,
            initial_rows=_get_int("INITIAL_ROWS", DEFAULT_ROW_COUNT),
        )
