import pytest

from config import Settings

ENV_VARS = [
    "OPENAI_API_KEY",
    "LLM_PROVIDER",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "LLM_TIMEOUT",
    "STAGE_TIMEOUT",
    "PIPELINE_VARIANT",
    "INITIAL_ROWS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()

    assert settings.openai_api_key is None
    assert settings.llm_model == "gpt-4o"
    assert settings.llm_temperature == 0.5
    assert settings.pipeline_variant == "staged"
    assert settings.initial_rows == 4


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("LLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("STAGE_TIMEOUT", "5")
    monkeypatch.setenv("PIPELINE_VARIANT", "Quick")
    monkeypatch.setenv("INITIAL_ROWS", "10")

    settings = Settings.from_env()

    assert settings.openai_api_key == "sk-test"
    assert settings.llm_model == "gpt-4o-mini"
    assert settings.stage_timeout == 5.0
    assert settings.pipeline_variant == "quick"
    assert settings.initial_rows == 10


def test_bad_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("LLM_TEMPERATURE", "warm")
    monkeypatch.setenv("INITIAL_ROWS", "-3")
    monkeypatch.setenv("PIPELINE_VARIANT", "parallel")

    settings = Settings.from_env()

    assert settings.llm_temperature == 0.5
    assert settings.initial_rows == 4
    assert settings.pipeline_variant == "staged"
