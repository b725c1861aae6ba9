import pytest

from classify import ClassificationPipeline, MessageClassifier
from fakes import LOVE_REPLIES, RecordingNotifier, ScriptedLLM
from grid import GridView
from rows import RowStore


@pytest.fixture
def llm() -> ScriptedLLM:
    return ScriptedLLM(LOVE_REPLIES)


@pytest.fixture
def outage_llm() -> ScriptedLLM:
    return ScriptedLLM({})


@pytest.fixture
def classifier(llm) -> MessageClassifier:
    return MessageClassifier(llm, stage_timeout=1.0)


@pytest.fixture
def pipeline(classifier) -> ClassificationPipeline:
    return ClassificationPipeline(classifier)


@pytest.fixture
def store() -> RowStore:
    return RowStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def view(store, pipeline, notifier) -> GridView:
    return GridView(store, pipeline, notifier)
