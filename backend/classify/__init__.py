"""Customer message classification."""

from classify.classifier import MessageClassifier
from classify.pipeline import ClassificationPipeline, PipelineState, classify_message

__all__ = [
    "MessageClassifier",
    "ClassificationPipeline",
    "PipelineState",
    "classify_message",
]
