"""Feedback anchoring testing utilities."""

from feedback_anchoring.testing.scheduler import ManualScheduler, ManualTimer

__all__ = ["ManualScheduler", "ManualTimer"]
