"""Configuration for anchoring, segmentation and highlight timing.

Defaults match the review UI contract:
- Hover highlight debounce: 50 ms
- Post-tap pointer suppression window: 400 ms
- Anchor similarity thresholds: valid >= 0.8, drifted >= 0.5

Core components never read the environment; they receive an explicit
AnchoringConfig. Only the CLI and HTTP adapters call load_anchoring_config().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final

logger = logging.getLogger(__name__)

ENV_DEBOUNCE_MS: Final[str] = "FEEDBACK_ANCHORING_DEBOUNCE_MS"
ENV_TOUCH_SUPPRESSION_MS: Final[str] = "FEEDBACK_ANCHORING_TOUCH_SUPPRESSION_MS"
ENV_VALID_THRESHOLD: Final[str] = "FEEDBACK_ANCHORING_VALID_THRESHOLD"
ENV_DRIFT_THRESHOLD: Final[str] = "FEEDBACK_ANCHORING_DRIFT_THRESHOLD"
ENV_ANSWER_SEPARATOR: Final[str] = "FEEDBACK_ANCHORING_ANSWER_SEPARATOR"

DEFAULT_DEBOUNCE_MS: Final[int] = 50
DEFAULT_TOUCH_SUPPRESSION_MS: Final[int] = 400
DEFAULT_VALID_THRESHOLD: Final[float] = 0.8
DEFAULT_DRIFT_THRESHOLD: Final[float] = 0.5
DEFAULT_ANSWER_SEPARATOR: Final[str] = "\n\n"

MILLISECONDS_PER_SECOND: Final[int] = 1000


class AnchoringConfigError(Exception):
    """Raised when anchoring configuration is invalid."""


@dataclass(frozen=True)
class AnchoringConfig:
    """Anchoring configuration (immutable).

    Attributes:
        debounce_ms: Delay before a hover highlight is committed.
        touch_suppression_ms: Window after a tap during which pointer events are ignored.
        valid_threshold: Minimum similarity for an anchor to be valid.
        drift_threshold: Minimum similarity for an anchor to be drifted rather than orphaned.
        answer_separator: Joiner used to build the concatenated submission text.
    """

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    touch_suppression_ms: int = DEFAULT_TOUCH_SUPPRESSION_MS
    valid_threshold: float = DEFAULT_VALID_THRESHOLD
    drift_threshold: float = DEFAULT_DRIFT_THRESHOLD
    answer_separator: str = DEFAULT_ANSWER_SEPARATOR

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.debounce_ms < 0:
            raise AnchoringConfigError(
                f"{ENV_DEBOUNCE_MS} must be a non-negative integer, got {self.debounce_ms}"
            )
        if self.touch_suppression_ms < 0:
            raise AnchoringConfigError(
                f"{ENV_TOUCH_SUPPRESSION_MS} must be a non-negative integer, "
                f"got {self.touch_suppression_ms}"
            )
        if not 0.0 <= self.valid_threshold <= 1.0:
            raise AnchoringConfigError(
                f"{ENV_VALID_THRESHOLD} must be within [0, 1], got {self.valid_threshold}"
            )
        if not 0.0 <= self.drift_threshold <= self.valid_threshold:
            raise AnchoringConfigError(
                f"{ENV_DRIFT_THRESHOLD} must be within [0, {ENV_VALID_THRESHOLD}], "
                f"got {self.drift_threshold}"
            )
        if not self.answer_separator:
            raise AnchoringConfigError(f"{ENV_ANSWER_SEPARATOR} must not be empty")

    @property
    def debounce_seconds(self) -> float:
        """Hover debounce delay in seconds (scheduler unit)."""
        return self.debounce_ms / MILLISECONDS_PER_SECOND

    @property
    def touch_suppression_seconds(self) -> float:
        """Post-tap suppression window in seconds (scheduler unit)."""
        return self.touch_suppression_ms / MILLISECONDS_PER_SECOND


def _parse_non_negative_int(env_var: str, default: int) -> int:
    """Parse a non-negative integer from environment variable.

    Args:
        env_var: Environment variable name.
        default: Default value if env var is unset or blank.

    Returns:
        Parsed integer.

    Raises:
        AnchoringConfigError: If value is set but not a non-negative integer.
    """
    raw = os.environ.get(env_var)
    if raw is None:
        return default

    raw = raw.strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError as e:
        raise AnchoringConfigError(
            f"{env_var} must be a non-negative integer, got '{raw}'"
        ) from e

    if value < 0:
        raise AnchoringConfigError(f"{env_var} must be a non-negative integer, got {value}")

    return value


def _parse_ratio(env_var: str, default: float) -> float:
    """Parse a float in [0, 1] from environment variable.

    Raises:
        AnchoringConfigError: If value is set but not a number within [0, 1].
    """
    raw = os.environ.get(env_var)
    if raw is None or not raw.strip():
        return default

    raw = raw.strip()
    try:
        value = float(raw)
    except ValueError as e:
        raise AnchoringConfigError(f"{env_var} must be a number in [0, 1], got '{raw}'") from e

    if not 0.0 <= value <= 1.0:
        raise AnchoringConfigError(f"{env_var} must be a number in [0, 1], got {value}")

    return value


def load_anchoring_config() -> AnchoringConfig:
    """Load anchoring configuration from environment variables.

    Environment variables:
        FEEDBACK_ANCHORING_DEBOUNCE_MS: Hover debounce in ms (default: 50)
        FEEDBACK_ANCHORING_TOUCH_SUPPRESSION_MS: Post-tap window in ms (default: 400)
        FEEDBACK_ANCHORING_VALID_THRESHOLD: Valid similarity threshold (default: 0.8)
        FEEDBACK_ANCHORING_DRIFT_THRESHOLD: Drift similarity threshold (default: 0.5)
        FEEDBACK_ANCHORING_ANSWER_SEPARATOR: Answer joiner (default: blank line)

    Returns:
        AnchoringConfig with validated values.

    Raises:
        AnchoringConfigError: If any value is invalid.
    """
    separator = os.environ.get(ENV_ANSWER_SEPARATOR)
    if separator is None or separator == "":
        separator = DEFAULT_ANSWER_SEPARATOR
    else:
        # Allow "\n" escapes since env files rarely carry literal newlines.
        separator = separator.replace("\\n", "\n")

    config = AnchoringConfig(
        debounce_ms=_parse_non_negative_int(ENV_DEBOUNCE_MS, DEFAULT_DEBOUNCE_MS),
        touch_suppression_ms=_parse_non_negative_int(
            ENV_TOUCH_SUPPRESSION_MS, DEFAULT_TOUCH_SUPPRESSION_MS
        ),
        valid_threshold=_parse_ratio(ENV_VALID_THRESHOLD, DEFAULT_VALID_THRESHOLD),
        drift_threshold=_parse_ratio(ENV_DRIFT_THRESHOLD, DEFAULT_DRIFT_THRESHOLD),
        answer_separator=separator,
    )
    logger.debug("Loaded anchoring config: %s", config)
    return config
