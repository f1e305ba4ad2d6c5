"""Highlight synchronization between annotation cards and text spans."""

from feedback_anchoring.services.highlight.interaction import HighlightInteraction
from feedback_anchoring.services.highlight.scheduler import (
    Cancellable,
    Scheduler,
    ThreadingScheduler,
)
from feedback_anchoring.services.highlight.store import (
    HighlightReader,
    HighlightStore,
    HighlightWriter,
)

__all__ = [
    "Cancellable",
    "HighlightInteraction",
    "HighlightReader",
    "HighlightStore",
    "HighlightWriter",
    "Scheduler",
    "ThreadingScheduler",
]
