"""Filesystem-triggered re-evaluation."""

from __future__ import annotations

from lintkeep.watch.handler import ChangeEventHandler
from lintkeep.watch.loop import WatchLoop, WatchState

__all__ = ["ChangeEventHandler", "WatchLoop", "WatchState"]
