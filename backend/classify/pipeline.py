"""Sequential classification pipeline for a single message.

The staged pipeline is a linear state machine::

    PENDING -> CATEGORIZED -> SCORED -> RESPONDED

Each transition is a ``Stage`` that makes one LLM call. If the call fails
for any reason the stage's typed fallback is substituted and the machine
advances, so later stages always see a value for every earlier stage and a
run always ends fully populated.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Literal

import weave

from classify.classifier import (
    FALLBACK_ACTION,
    FALLBACK_CATEGORY,
    FALLBACK_CONFIDENCE,
    FALLBACK_QUICK,
    FALLBACK_RESPONSE,
    MessageClassifier,
)
from models import ClassificationResult

logger = logging.getLogger(__name__)

Variant = Literal["staged", "quick"]
VARIANTS: tuple[str, ...] = ("staged", "quick")


class PipelineState(str, Enum):
    PENDING = "pending"
    CATEGORIZED = "categorized"
    SCORED = "scored"
    RESPONDED = "responded"


@dataclass
class PipelineRun:
    """Mutable state of one pipeline run."""

    message: str
    state: PipelineState = PipelineState.PENDING
    values: dict[str, Any] = field(default_factory=dict)
    fallbacks: list[str] = field(default_factory=list)

    def result(self) -> ClassificationResult:
        """Build the combined result once the run is complete."""
        if self.state is not PipelineState.RESPONDED:
            raise RuntimeError(f"Pipeline run incomplete (state: {self.state.value})")
        return ClassificationResult(
            category=self.values["category"],
            confidence=self.values["confidence"],
            response=self.values["response"],
            action=self.values["action"],
        )


@dataclass(frozen=True)
class Stage:
    """One transition of the pipeline state machine.

    Attributes:
        name: Stage name used in logs and fallback traces.
        source: State the run must be in before the stage runs.
        target: State the run moves to afterwards.
        call: Builds the LLM request from the run and returns the new values.
        fallback: Values substituted when ``call`` fails.
    """

    name: str
    source: PipelineState
    target: PipelineState
    call: Callable[[PipelineRun], Awaitable[dict[str, Any]]]
    fallback: dict[str, Any]

    async def advance(self, run: PipelineRun) -> None:
        if run.state is not self.source:
            raise RuntimeError(
                f"Stage {self.name} expects state {self.source.value}, got {run.state.value}"
            )
        try:
            values = await self.call(run)
        except Exception as e:
            logger.error("Stage %s failed, using fallback %s: %r", self.name, self.fallback, e)
            values = dict(self.fallback)
            run.fallbacks.append(self.name)
        run.values.update(values)
        run.state = self.target


def staged_pipeline(classifier: MessageClassifier) -> list[Stage]:
    """Build the three-stage categorize, score, respond pipeline."""

    async def categorize(run: PipelineRun) -> dict[str, Any]:
        return {"category": await classifier.fetch_category(run.message)}

    async def score(run: PipelineRun) -> dict[str, Any]:
        confidence = await classifier.fetch_confidence(run.message, run.values["category"])
        return {"confidence": confidence}

    async def respond(run: PipelineRun) -> dict[str, Any]:
        response, action = await classifier.fetch_response(
            run.message, run.values["category"], run.values["confidence"]
        )
        return {"response": response, "action": action}

    return [
        Stage(
            name="categorize",
            source=PipelineState.PENDING,
            target=PipelineState.CATEGORIZED,
            call=categorize,
            fallback={"category": FALLBACK_CATEGORY},
        ),
        Stage(
            name="score_confidence",
            source=PipelineState.CATEGORIZED,
            target=PipelineState.SCORED,
            call=score,
            fallback={"confidence": FALLBACK_CONFIDENCE},
        ),
        Stage(
            name="generate_response",
            source=PipelineState.SCORED,
            target=PipelineState.RESPONDED,
            call=respond,
            fallback={"response": FALLBACK_RESPONSE, "action": FALLBACK_ACTION},
        ),
    ]


def quick_pipeline(classifier: MessageClassifier) -> list[Stage]:
    """Build the single-call pipeline that produces everything at once."""

    async def classify(run: PipelineRun) -> dict[str, Any]:
        result = await classifier.fetch_quick(run.message)
        return result.model_dump()

    return [
        Stage(
            name="classify",
            source=PipelineState.PENDING,
            target=PipelineState.RESPONDED,
            call=classify,
            fallback=FALLBACK_QUICK.model_dump(),
        ),
    ]


class ClassificationPipeline:
    """Runs the classification stages for one message strictly in order."""

    def __init__(self, classifier: MessageClassifier, variant: Variant = "staged"):
        if variant not in VARIANTS:
            raise ValueError(f"Unknown pipeline variant: {variant}")
        self.classifier = classifier
        self.variant = variant
        if variant == "quick":
            self.stages = quick_pipeline(classifier)
        else:
            self.stages = staged_pipeline(classifier)

    async def execute(self, message: str) -> PipelineRun:
        """Run every stage and return the finished run with its fallback trace.

        Raises:
            ValueError: If the message is empty; callers short-circuit instead.
        """
        if not message or not message.strip():
            raise ValueError("Cannot classify an empty message")

        run = PipelineRun(message=message)
        for stage in self.stages:
            await stage.advance(run)

        if run.fallbacks:
            logger.warning(
                "Pipeline finished with fallbacks for %s: %s",
                message[:50],
                ", ".join(run.fallbacks),
            )
        return run

    @weave.op()
    async def run(self, message: str) -> ClassificationResult:
        """Classify a non-empty message and return the combined result."""
        run = await self.execute(message)
        result = run.result()
        logger.info(
            "Classified message as %s (confidence: %.0f, action: %s): %s",
            result.category,
            result.confidence,
            result.action or "-",
            message[:50],
        )
        return result


async def classify_message(pipeline: ClassificationPipeline, message: str) -> ClassificationResult:
    """Classify a message, short-circuiting empty input to the empty result."""
    if not message or not message.strip():
        return ClassificationResult.empty()
    return await pipeline.run(message)
