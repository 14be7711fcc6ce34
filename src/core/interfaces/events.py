"""Progress events emitted by the sync pipeline.

The CLI renders them with Rich; tests record them.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class SyncStage(str, Enum):
    """Stages a run goes through, in emission order."""

    START = "start"
    CONFIG = "config"
    AUTHENTICATE = "authenticate"
    PROJECT = "project"
    LIST_LOCALES = "list_locales"
    RECONCILE = "reconcile"
    NO_MATCH = "no_match"
    LOCALE_START = "locale_start"
    DIRECTORY = "directory"
    DOWNLOAD = "download"
    SAVE = "save"
    LOCALE_DONE = "locale_done"
    LOCALE_FAILED = "locale_failed"
    DONE = "done"
    ERROR = "error"


@runtime_checkable
class SyncObserver(Protocol):
    """Receives one call per progress event.

    `locale` is set for per-locale stages and `None` otherwise.
    """

    def on_event(self, stage: SyncStage, locale: str | None, message: str) -> None:
        ...


class NullObserver:
    """Observer that drops every event."""

    def on_event(self, stage: SyncStage, locale: str | None, message: str) -> None:
        return None
