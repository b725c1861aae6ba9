"""Ephemeral user-facing status notifications."""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator


class Notifier(ABC):
    """Sink for transient status messages (toasts).

    Implementations hold no state about past notifications.
    """

    @abstractmethod
    def success(self, message: str) -> None:
        """Show a success message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show a failure message."""

    @abstractmethod
    def show_loading(self, message: str) -> object:
        """Show a loading indicator and return a handle for dismissing it."""

    @abstractmethod
    def dismiss(self, handle: object) -> None:
        """Dismiss a loading indicator."""

    @asynccontextmanager
    async def loading(self, message: str) -> AsyncIterator[None]:
        """Show a loading indicator for the duration of the block.

        The indicator is dismissed whether the block succeeds or raises.
        """
        handle = self.show_loading(message)
        try:
            yield
        finally:
            self.dismiss(handle)


class LogNotifier(Notifier):
    """Notifier that writes notifications to the log."""

    def __init__(self, name: str = "notify"):
        self._logger = logging.getLogger(name)

    def success(self, message: str) -> None:
        self._logger.info("[success] %s", message)

    def error(self, message: str) -> None:
        self._logger.error("[error] %s", message)

    def show_loading(self, message: str) -> object:
        self._logger.info("[loading] %s", message)
        return message

    def dismiss(self, handle: object) -> None:
        self._logger.debug("[dismissed] %s", handle)
