"""Translate watchdog events into change/add/remove notifications."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypeAlias

from watchdog.events import FileSystemEvent, FileSystemEventHandler, FileSystemMovedEvent

from lintkeep.constants.watch import EVENT_ADD, EVENT_CHANGE, EVENT_REMOVE
from lintkeep.types import EventType

EventSink: TypeAlias = Callable[[EventType, str], None]


class ChangeEventHandler(FileSystemEventHandler):
    """Forward file events to ``sink``; directory events are dropped.

    Runs on the watchdog observer thread, so ``sink`` must be thread-safe.
    """

    def __init__(self, sink: EventSink) -> None:
        super().__init__()
        self._sink = sink

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._sink(EVENT_ADD, os.fsdecode(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._sink(EVENT_CHANGE, os.fsdecode(event.src_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._sink(EVENT_REMOVE, os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory or not isinstance(event, FileSystemMovedEvent):
            return
        self._sink(EVENT_REMOVE, os.fsdecode(event.src_path))
        self._sink(EVENT_ADD, os.fsdecode(event.dest_path))
