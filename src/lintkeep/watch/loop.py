"""Single-flight watch loop that re-runs a batch after filesystem changes.

Events only raise a flag. The loop clears the flag right before it starts a
batch, so any number of events that land while a batch is running produce
exactly one follow-up batch, and batches never overlap.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from lintkeep.constants.config import DEFAULT_DEBOUNCE_SECONDS
from lintkeep.constants.watch import EVENT_REMOVE, OBSERVER_JOIN_TIMEOUT_SECONDS, TRIGGERING_EVENTS
from lintkeep.exceptions import LintkeepError, WatchSubscriptionError
from lintkeep.scanner.discovery import is_ignored, relative_key
from lintkeep.types import EventType
from lintkeep.watch.handler import ChangeEventHandler

logger = logging.getLogger(__name__)


class ObserverLike(Protocol):
    """The subset of ``watchdog.observers.Observer`` the loop relies on."""

    def schedule(self, event_handler: FileSystemEventHandler, path: str, *, recursive: bool = ...) -> Any: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def join(self, timeout: float | None = None) -> None: ...


class WatchState(enum.Enum):
    IDLE = "idle"
    EVALUATING = "evaluating"
    STOPPED = "stopped"


class WatchLoop:
    """Re-run ``run_batch`` whenever files under ``root`` change, until stopped."""

    def __init__(
        self,
        root: Path,
        run_batch: Callable[[list[str]], object],
        *,
        ignore_patterns: tuple[str, ...] = (),
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        observer_factory: Callable[[], ObserverLike] = Observer,
        on_error: Callable[[LintkeepError], None] | None = None,
    ) -> None:
        """Create a loop; ``run_batch`` receives the changed paths that woke it."""
        self._root = root.resolve()
        self._run_batch = run_batch
        self._ignore_patterns = ignore_patterns
        self._debounce_seconds = debounce_seconds
        self._observer_factory = observer_factory
        self._on_error = on_error

        self._trigger = threading.Event()
        self._stopping = threading.Event()
        self._lock = threading.Lock()
        self._changed: dict[str, None] = {}
        self._observer: ObserverLike | None = None
        self._thread: threading.Thread | None = None
        self._failure: BaseException | None = None
        self._state = WatchState.IDLE
        self.batches_run = 0

    @property
    def state(self) -> WatchState:
        return self._state

    def notify(self, event_type: EventType, path: str) -> None:
        """Record a filesystem event. Safe to call from any thread."""
        if is_ignored(relative_key(path, self._root), self._ignore_patterns):
            return
        if event_type == EVENT_REMOVE:
            logger.debug("Removed: %s", path)
            return
        if event_type not in TRIGGERING_EVENTS:
            return
        logger.debug("Change detected (%s): %s", event_type, path)
        with self._lock:
            self._changed[path] = None
        self._trigger.set()

    def run(self, *, initial: bool = True) -> None:
        """Subscribe and run the loop on the calling thread until :meth:`stop`."""
        self._subscribe()
        try:
            self._loop(initial)
        finally:
            self._unsubscribe()

    def start(self, *, initial: bool = True) -> None:
        """Subscribe on the calling thread, then run the loop in the background.

        Subscription failures raise here, before any thread is started.
        """
        if self._thread is not None:
            raise RuntimeError("watch loop already started")
        self._subscribe()
        self._thread = threading.Thread(
            target=self._run_in_thread,
            args=(initial,),
            name="lintkeep-watch",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop scheduling batches. An in-flight batch is allowed to finish."""
        self._stopping.set()
        self._trigger.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Join the background loop; re-raise anything that killed it.

        Returns True once the loop has fully stopped.
        """
        if self._thread is None:
            return self._state is WatchState.STOPPED
        self._thread.join(timeout)
        if self._failure is not None:
            raise self._failure
        return not self._thread.is_alive()

    def _run_in_thread(self, initial: bool) -> None:
        try:
            self._loop(initial)
        except Exception as exc:
            logger.exception("Watch loop stopped unexpectedly")
            self._failure = exc
        finally:
            self._unsubscribe()

    def _loop(self, initial: bool) -> None:
        if initial and not self._stopping.is_set():
            self._evaluate([])

        while True:
            self._trigger.wait()
            if self._stopping.is_set():
                break
            if self._debounce_seconds > 0 and self._stopping.wait(self._debounce_seconds):
                break
            self._trigger.clear()
            with self._lock:
                changed = list(self._changed)
                self._changed.clear()
            self._evaluate(changed)

    def _evaluate(self, changed: list[str]) -> None:
        self._state = WatchState.EVALUATING
        try:
            self._run_batch(changed)
        except LintkeepError as exc:
            if self._on_error is not None:
                self._on_error(exc)
            else:
                logger.error("Batch failed: %s", exc)
        finally:
            self.batches_run += 1
            self._state = WatchState.IDLE

    def _subscribe(self) -> None:
        if self._observer is not None:
            return
        handler = ChangeEventHandler(self.notify)
        try:
            observer = self._observer_factory()
            observer.schedule(handler, str(self._root), recursive=True)
            observer.start()
        except (OSError, RuntimeError) as exc:
            raise WatchSubscriptionError(f"Cannot watch {self._root}: {exc}") from exc
        self._observer = observer
        logger.info("Watching %s for changes", self._root)

    def _unsubscribe(self) -> None:
        self._state = WatchState.STOPPED
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join(OBSERVER_JOIN_TIMEOUT_SECONDS)
        logger.info("Stopped watching %s", self._root)
