"""Customer message classifier using an LLM."""

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

import weave
from pydantic import BaseModel, Field

from classify.prompts import (
    CATEGORY_PROMPT,
    CATEGORY_SCHEMA,
    CATEGORY_SYSTEM_PROMPT,
    CONFIDENCE_PROMPT,
    CONFIDENCE_SCHEMA,
    CONFIDENCE_SYSTEM_PROMPT,
    QUICK_SCHEMA,
    QUICK_SYSTEM_PROMPT,
    RESPONSE_PROMPT,
    RESPONSE_SCHEMA,
    RESPONSE_SYSTEM_PROMPT,
)
from llm.base import BaseLLM
from models import Action, Category, ClassificationResult, QuickCategory

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fallbacks lean towards human review
FALLBACK_CATEGORY: Category = "Others"
FALLBACK_CONFIDENCE = 60.0
FALLBACK_RESPONSE = "Error generating response"
FALLBACK_ACTION: Action = "CRM Ticket"
FALLBACK_QUICK = ClassificationResult(
    category="Others", confidence=0, response="", action=""
)

DEFAULT_STAGE_TIMEOUT = 30.0


class CategoryReply(BaseModel):
    category: Category


class ConfidenceReply(BaseModel):
    confidence: float = Field(allow_inf_nan=False)
    reasoning: str


class ResponseReply(BaseModel):
    response: str = Field(min_length=1)
    action: Action


class QuickReply(BaseModel):
    category: QuickCategory
    confidence: float = Field(allow_inf_nan=False)
    actionableText: str


def clamp_confidence(value: float) -> float:
    """Clamp a confidence score into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


class MessageClassifier:
    """Classifies customer messages with one LLM call per stage.

    The ``fetch_*`` methods raise on any failure: transport errors, timeouts
    and replies that fail schema validation. The public stage methods
    (``categorize``, ``score_confidence``, ``generate_response``,
    ``classify_quick``) absorb those failures and return the stage fallback.
    """

    def __init__(self, llm: BaseLLM, stage_timeout: float | None = DEFAULT_STAGE_TIMEOUT):
        """Initialize the classifier.

        Args:
            llm: The LLM provider to use for classification.
            stage_timeout: Seconds allowed per LLM call, or None for no limit.
        """
        self.llm = llm
        self.stage_timeout = stage_timeout

    async def _ask(
        self,
        name: str,
        prompt: str,
        system: str,
        schema: dict[str, Any],
        reply_model: type[BaseModel],
    ) -> Any:
        """Run one structured LLM call and validate the reply."""
        call = self.llm.complete(prompt, schema=schema, system=system, schema_name=name)
        if self.stage_timeout:
            response = await asyncio.wait_for(call, timeout=self.stage_timeout)
        else:
            response = await call
        return reply_model.model_validate(response)

    @weave.op()
    async def fetch_category(self, message: str) -> str:
        reply = await self._ask(
            "category",
            CATEGORY_PROMPT.format(message=message),
            CATEGORY_SYSTEM_PROMPT,
            CATEGORY_SCHEMA,
            CategoryReply,
        )
        logger.info("Categorized message as %s: %s", reply.category, message[:50])
        return reply.category

    @weave.op()
    async def fetch_confidence(self, message: str, category: str) -> float:
        reply = await self._ask(
            "confidence",
            CONFIDENCE_PROMPT.format(message=message, category=category),
            CONFIDENCE_SYSTEM_PROMPT,
            CONFIDENCE_SCHEMA,
            ConfidenceReply,
        )
        confidence = clamp_confidence(reply.confidence)
        # Reasoning is logged only, never shown to the user
        logger.info("Scored confidence %.0f for %s: %s", confidence, category, reply.reasoning)
        return confidence

    @weave.op()
    async def fetch_response(
        self,
        message: str,
        category: str,
        confidence: float,
    ) -> tuple[str, str]:
        reply = await self._ask(
            "response",
            RESPONSE_PROMPT.format(
                message=message,
                category=category,
                confidence=f"{confidence:.0f}",
            ),
            RESPONSE_SYSTEM_PROMPT,
            RESPONSE_SCHEMA,
            ResponseReply,
        )
        logger.info("Generated %s response for %s message", reply.action, category)
        return reply.response, reply.action

    @weave.op()
    async def fetch_quick(self, message: str) -> ClassificationResult:
        reply = await self._ask(
            "category",
            CATEGORY_PROMPT.format(message=message),
            QUICK_SYSTEM_PROMPT,
            QUICK_SCHEMA,
            QuickReply,
        )
        logger.info(
            "Classified message as %s (confidence: %.0f): %s",
            reply.category,
            reply.confidence,
            message[:50],
        )
        return ClassificationResult(
            category=reply.category,
            confidence=clamp_confidence(reply.confidence),
            response=reply.actionableText,
            action="",
        )

    async def _absorb(self, stage: str, call: Awaitable[T], fallback: T) -> T:
        try:
            return await call
        except Exception as e:
            logger.error("%s failed, using fallback %r: %r", stage, fallback, e)
            return fallback

    async def categorize(self, message: str) -> str:
        """Return the category for a message, or "Others" on failure."""
        return await self._absorb(
            "Categorization", self.fetch_category(message), FALLBACK_CATEGORY
        )

    async def score_confidence(self, message: str, category: str) -> float:
        """Return a 0-100 confidence score, or 60 on failure."""
        return await self._absorb(
            "Confidence scoring",
            self.fetch_confidence(message, category),
            FALLBACK_CONFIDENCE,
        )

    async def generate_response(
        self,
        message: str,
        category: str,
        confidence: float,
    ) -> tuple[str, str]:
        """Return a suggested reply and action, or an escalation on failure."""
        return await self._absorb(
            "Response generation",
            self.fetch_response(message, category, confidence),
            (FALLBACK_RESPONSE, FALLBACK_ACTION),
        )

    async def classify_quick(self, message: str) -> ClassificationResult:
        """Classify a message with a single combined call.

        Falls back to category "Others", confidence 0 and an empty hint.
        """
        return await self._absorb(
            "Classification", self.fetch_quick(message), FALLBACK_QUICK.model_copy()
        )
