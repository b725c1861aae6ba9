"""Test doubles for the LLM and notification layers."""

import asyncio
from typing import Any

from llm.base import BaseLLM, LLMError
from notify import Notifier

LOVE_REPLIES: dict[str, Any] = {
    "category": {"category": "Love"},
    "confidence": {"confidence": 92, "reasoning": "Clear, single-intent praise."},
    "response": {
        "response": "Thank you so much! We're thrilled you love our protein bars.",
        "action": "DM/Comment",
    },
}


class ScriptedLLM(BaseLLM):
    """LLM that returns canned replies keyed by schema name.

    A reply may be a dict (returned as-is) or an exception (raised). A schema
    name with no scripted reply raises ``LLMError``.
    """

    def __init__(self, replies: dict[str, Any] | None = None, model: str = "scripted"):
        self.replies = dict(replies or {})
        self.calls: list[dict[str, Any]] = []
        self._model = model

    @property
    def model_name(self) -> str:
        return self._model

    async def complete(
        self,
        prompt: str,
        schema: dict[str, Any] | None = None,
        *,
        system: str | None = None,
        schema_name: str = "response",
    ) -> dict[str, Any]:
        self.calls.append(
            {"prompt": prompt, "schema": schema, "system": system, "schema_name": schema_name}
        )
        reply = self.replies.get(schema_name)
        if reply is None:
            raise LLMError(f"No reply scripted for {schema_name}")
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def calls_for(self, schema_name: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["schema_name"] == schema_name]


class GatedLLM(ScriptedLLM):
    """ScriptedLLM whose calls block until ``gate`` is set."""

    def __init__(self, replies: dict[str, Any] | None = None):
        super().__init__(replies)
        self.gate = asyncio.Event()

    async def complete(self, prompt, schema=None, *, system=None, schema_name="response"):
        self.calls.append(
            {"prompt": prompt, "schema": schema, "system": system, "schema_name": schema_name}
        )
        await self.gate.wait()
        reply = self.replies.get(schema_name)
        if reply is None:
            raise LLMError(f"No reply scripted for {schema_name}")
        return reply


class SlowLLM(ScriptedLLM):
    """ScriptedLLM that never answers in time."""

    async def complete(self, prompt, schema=None, *, system=None, schema_name="response"):
        self.calls.append(
            {"prompt": prompt, "schema": schema, "system": system, "schema_name": schema_name}
        )
        await asyncio.sleep(10)
        return {}


class RecordingNotifier(Notifier):
    """Notifier that records every event, including loading start and stop."""

    def __init__(self):
        self.events: list[tuple[str, str]] = []
        self.active_loading = 0

    def success(self, message: str) -> None:
        self.events.append(("success", message))

    def error(self, message: str) -> None:
        self.events.append(("error", message))

    def show_loading(self, message: str) -> object:
        self.active_loading += 1
        self.events.append(("loading", message))
        return message

    def dismiss(self, handle: object) -> None:
        self.active_loading -= 1
        self.events.append(("dismiss", str(handle)))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


async def wait_for_calls(llm: ScriptedLLM, count: int = 1) -> None:
    """Yield to the event loop until the LLM has received ``count`` calls."""
    for _ in range(100):
        if len(llm.calls) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"LLM received {len(llm.calls)} calls, expected {count}")
