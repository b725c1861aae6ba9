"""Pydantic models for rows and classification results."""

import uuid
from typing import Literal, get_args

from pydantic import BaseModel, Field, computed_field

Category = Literal[
    "Love",
    "Grievance",
    "Order Information",
    "Product Information",
    "Business Queries",
    "Hiring",
    "Others",
]
# The single-call classifier also allows "Fact"
QuickCategory = Literal[
    "Love",
    "Grievance",
    "Order Information",
    "Product Information",
    "Fact",
    "Business Queries",
    "Hiring",
    "Others",
]
Action = Literal["Email", "DM/Comment", "CRM Ticket"]
Status = Literal["Automated", "Needs Review"]

CATEGORIES: tuple[str, ...] = get_args(Category)
QUICK_CATEGORIES: tuple[str, ...] = get_args(QuickCategory)
ACTIONS: tuple[str, ...] = get_args(Action)

# Rows at or above this confidence are handled without human review
AUTOMATION_THRESHOLD = 75.0


def new_row_id() -> str:
    """Generate a short stable row identifier."""
    return str(uuid.uuid4())[:8]


def status_for(confidence: float | None) -> Status:
    """Return the handling status for a confidence score."""
    if confidence is not None and confidence >= AUTOMATION_THRESHOLD:
        return "Automated"
    return "Needs Review"


class ClassificationResult(BaseModel):
    """Combined output of the classification pipeline for one message."""

    category: QuickCategory | Literal[""] = Field(description="Message category")
    confidence: float = Field(ge=0, le=100, description="Confidence score (0-100)")
    response: str = Field(description="Suggested response or actionable hint")
    action: Action | Literal[""] = Field(description="Recommended handling channel")

    @classmethod
    def empty(cls) -> "ClassificationResult":
        """Return the fixed result for a cleared message."""
        return cls(category="", confidence=0, response="", action="")


class Row(BaseModel):
    """One user-entered message and its classification outcome.

    Classification fields are either all empty or all populated; use
    ``unclassified`` and ``with_result`` to move between the two states.
    """

    id: str = Field(default_factory=new_row_id, description="Stable row identifier")
    message: str = Field(default="", description="User-entered message text")
    category: QuickCategory | Literal[""] = ""
    confidence: float | None = Field(default=None, ge=0, le=100)
    response: str = ""
    action: Action | Literal[""] = ""
    revision: int = Field(default=0, description="Incremented on every message edit")

    @property
    def is_classified(self) -> bool:
        """Return True if the row carries a classification."""
        return bool(self.category)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> Status | None:
        """Return the handling status, or None for unclassified rows."""
        if not self.is_classified:
            return None
        return status_for(self.confidence)

    def unclassified(self, message: str | None = None, confidence: float | None = None) -> "Row":
        """Return a copy with the classification fields cleared."""
        return self.model_copy(
            update={
                "message": self.message if message is None else message,
                "category": "",
                "confidence": confidence,
                "response": "",
                "action": "",
            }
        )

    def with_result(self, result: ClassificationResult) -> "Row":
        """Return a copy carrying the given classification result."""
        return self.model_copy(
            update={
                "category": result.category,
                "confidence": result.confidence,
                "response": result.response,
                "action": result.action,
            }
        )
