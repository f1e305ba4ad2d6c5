"""Highlight synchronization store - the currently highlighted annotation id.

Write rules:
- Debounced (pointer hover): the value is committed after a fixed delay
  (default 50 ms); any later write cancels the pending commit.
- Immediate (keyboard focus/blur, touch tap): cancels any pending commit and
  commits synchronously.

At most one commit is pending at any time. Each pending commit is tagged with
a generation number, so a timer that fires after being superseded is ignored
even when the scheduler could not cancel it in time.

Listeners are called while the store lock is held, so notifications arrive
in commit order even when debounced commits land on a timer thread. The
lock is reentrant: a listener may write back to the store.

Readers and writers are separate ports: a card that only sets highlight state
holds a HighlightWriter and is never notified of changes made elsewhere.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from feedback_anchoring.config import AnchoringConfig
from feedback_anchoring.services.highlight.scheduler import (
    Cancellable,
    Scheduler,
    ThreadingScheduler,
)

logger = logging.getLogger(__name__)

HighlightListener = Callable[[str | None], None]


class HighlightStore:
    """Holds the highlighted annotation id for one review session.

    Starts at None. Thread-safe: debounced commits may arrive on a timer thread.
    """

    def __init__(
        self,
        config: AnchoringConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            config: Timing configuration. Defaults to AnchoringConfig().
            scheduler: Timer source. Defaults to ThreadingScheduler().
        """
        self._config = config or AnchoringConfig()
        self._scheduler: Scheduler = scheduler or ThreadingScheduler()
        self._current: str | None = None
        self._pending: Cancellable | None = None
        self._generation = 0
        self._listeners: list[HighlightListener] = []
        self._closed = False
        self._lock = threading.RLock()
        self._reader = HighlightReader(self)
        self._writer = HighlightWriter(self)

    @property
    def reader(self) -> HighlightReader:
        """Read-only port."""
        return self._reader

    @property
    def writer(self) -> HighlightWriter:
        """Write-only port."""
        return self._writer

    @property
    def current(self) -> str | None:
        """Currently committed highlighted id."""
        with self._lock:
            return self._current

    @property
    def has_pending(self) -> bool:
        """True while a debounced commit is outstanding."""
        with self._lock:
            return self._pending is not None

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def set_highlighted(self, annotation_id: str | None, debounce: bool = True) -> None:
        """Request a new highlighted id.

        Args:
            annotation_id: Id to highlight, or None to clear.
            debounce: Delay the commit (hover) instead of committing now.
        """
        with self._lock:
            if self._closed:
                logger.warning("Ignoring highlight write to closed store: %r", annotation_id)
                return

            self._cancel_pending_locked()
            self._generation += 1

            if debounce:
                generation = self._generation
                self._pending = self._scheduler.call_later(
                    self._config.debounce_seconds,
                    lambda: self._commit_scheduled(generation, annotation_id),
                )
                logger.debug(
                    "Scheduled highlight %r in %d ms", annotation_id, self._config.debounce_ms
                )
                return

            if self._commit_locked(annotation_id):
                self._notify_locked(annotation_id)

    def reset(self) -> None:
        """Clear the highlight immediately, dropping any pending commit."""
        self.set_highlighted(None, debounce=False)

    def subscribe(self, listener: HighlightListener) -> Callable[[], None]:
        """Register a change listener.

        Args:
            listener: Called with the new id after each change.

        Returns:
            Callable that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Cancel any pending timer and stop accepting writes."""
        with self._lock:
            if self._closed:
                return
            self._cancel_pending_locked()
            self._generation += 1
            self._closed = True
            self._listeners.clear()
        logger.debug("Highlight store closed")

    def __enter__(self) -> HighlightStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _cancel_pending_locked(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _commit_locked(self, annotation_id: str | None) -> bool:
        """Store the value; returns True when it changed."""
        if annotation_id == self._current:
            return False
        self._current = annotation_id
        return True

    def _commit_scheduled(self, generation: int, annotation_id: str | None) -> None:
        with self._lock:
            if self._closed or generation != self._generation:
                logger.debug("Dropping stale highlight commit %r", annotation_id)
                return
            self._pending = None
            logger.debug("Committed debounced highlight %r", annotation_id)
            if self._commit_locked(annotation_id):
                self._notify_locked(annotation_id)

    def _notify_locked(self, annotation_id: str | None) -> None:
        for listener in list(self._listeners):
            if self._current != annotation_id:
                # A listener wrote back; the nested commit already notified everyone.
                return
            try:
                listener(annotation_id)
            except Exception:
                logger.exception("Highlight listener failed for %r", annotation_id)


class HighlightReader:
    """Read port: current value and change subscription."""

    def __init__(self, store: HighlightStore) -> None:
        self._store = store

    @property
    def current(self) -> str | None:
        return self._store.current

    def subscribe(self, listener: HighlightListener) -> Callable[[], None]:
        return self._store.subscribe(listener)


class HighlightWriter:
    """Write port: the setter wired to pointer, focus and touch handlers."""

    def __init__(self, store: HighlightStore) -> None:
        self._store = store

    def set_highlighted(self, annotation_id: str | None, debounce: bool = True) -> None:
        self._store.set_highlighted(annotation_id, debounce)

    __call__ = set_highlighted
