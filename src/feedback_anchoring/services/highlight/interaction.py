"""Per-element highlight interaction for annotation cards and text spans.

Pointer enter/leave writes are debounced; focus/blur and touch writes are
immediate. After a tap, pointer events are ignored for a short window
(default 400 ms) because many platforms emit synthetic enter/leave events
after a touch, which would otherwise undo the tap. The window timer is local
to the element.
"""

from __future__ import annotations

import logging

from feedback_anchoring.config import AnchoringConfig
from feedback_anchoring.models.annotation import AnchorStatus
from feedback_anchoring.services.highlight.scheduler import (
    Cancellable,
    Scheduler,
    ThreadingScheduler,
)
from feedback_anchoring.services.highlight.store import HighlightWriter

logger = logging.getLogger(__name__)


class HighlightInteraction:
    """Translates one element's input events into highlight writes.

    Elements whose annotation is not anchored (orphaned or no-anchor) never
    write highlight state.
    """

    def __init__(
        self,
        annotation_id: str,
        anchor_status: AnchorStatus,
        writer: HighlightWriter,
        *,
        scheduler: Scheduler | None = None,
        config: AnchoringConfig | None = None,
    ) -> None:
        self._annotation_id = annotation_id
        self._anchor_status = anchor_status
        self._writer = writer
        self._scheduler: Scheduler = scheduler or ThreadingScheduler()
        self._config = config or AnchoringConfig()
        self._touch_active = False
        self._suppress_pointer = False
        self._suppression_timer: Cancellable | None = None

    @property
    def enabled(self) -> bool:
        return self._anchor_status.is_anchored

    @property
    def touch_active(self) -> bool:
        return self._touch_active

    @property
    def pointer_suppressed(self) -> bool:
        return self._suppress_pointer

    def pointer_enter(self) -> None:
        if not self._pointer_allowed():
            return
        self._writer.set_highlighted(self._annotation_id, True)

    def pointer_leave(self) -> None:
        if not self._pointer_allowed():
            return
        self._writer.set_highlighted(None, True)

    def focus(self) -> None:
        if self.enabled:
            self._writer.set_highlighted(self._annotation_id, False)

    def blur(self) -> None:
        if self.enabled:
            self._writer.set_highlighted(None, False)

    def touch_start(self) -> None:
        """Toggle this element's highlight and open the pointer suppression window."""
        if not self.enabled:
            return
        self._touch_active = not self._touch_active
        self._writer.set_highlighted(self._annotation_id if self._touch_active else None, False)

        if self._suppression_timer is not None:
            self._suppression_timer.cancel()
        self._suppress_pointer = True
        self._suppression_timer = self._scheduler.call_later(
            self._config.touch_suppression_seconds,
            self._end_suppression,
        )

    def dispose(self) -> None:
        """Cancel the element-local suppression timer."""
        if self._suppression_timer is not None:
            self._suppression_timer.cancel()
            self._suppression_timer = None
        self._suppress_pointer = False

    def _pointer_allowed(self) -> bool:
        if not self.enabled:
            return False
        if self._suppress_pointer:
            logger.debug("Suppressed pointer event after tap on %s", self._annotation_id)
            return False
        return True

    def _end_suppression(self) -> None:
        self._suppress_pointer = False
        self._suppression_timer = None
