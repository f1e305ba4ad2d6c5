"""Pytest configuration and fixtures for feedback anchoring tests.

This module provides common fixtures and configuration for all tests.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from feedback_anchoring.config import (
    ENV_ANSWER_SEPARATOR,
    ENV_DEBOUNCE_MS,
    ENV_DRIFT_THRESHOLD,
    ENV_TOUCH_SUPPRESSION_MS,
    ENV_VALID_THRESHOLD,
    AnchoringConfig,
)
from feedback_anchoring.services.highlight.store import HighlightStore
from feedback_anchoring.testing import ManualScheduler

STUDENT_TEXT = "The student wrote this essay about climate change."


@pytest.fixture(autouse=True)
def clear_anchoring_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove anchoring env overrides so every test starts from defaults.

    Tests that need to verify env loading set the variables themselves.
    """
    for env_var in (
        ENV_DEBOUNCE_MS,
        ENV_TOUCH_SUPPRESSION_MS,
        ENV_VALID_THRESHOLD,
        ENV_DRIFT_THRESHOLD,
        ENV_ANSWER_SEPARATOR,
    ):
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual clock scheduler; nothing fires until advanced."""
    return ManualScheduler()


@pytest.fixture
def config() -> AnchoringConfig:
    return AnchoringConfig()


@pytest.fixture
def store(scheduler: ManualScheduler, config: AnchoringConfig) -> Iterator[HighlightStore]:
    """Highlight store driven by the manual scheduler."""
    highlight_store = HighlightStore(config, scheduler)
    yield highlight_store
    highlight_store.close()


@pytest.fixture
def student_text() -> str:
    return STUDENT_TEXT
