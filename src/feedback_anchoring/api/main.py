"""Feedback anchoring FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from feedback_anchoring import __version__
from feedback_anchoring.api.routes.health import router as health_router
from feedback_anchoring.api.routes.review import router as review_router
from feedback_anchoring.config import AnchoringConfig, load_anchoring_config


def create_app(config: AnchoringConfig | None = None) -> FastAPI:
    """Create and configure the API application.

    Args:
        config: Anchoring configuration. If None, loads from environment.

    Raises:
        AnchoringConfigError: If environment configuration is invalid.
    """
    app = FastAPI(
        title="Feedback Anchoring API",
        description="Anchor validation and segmentation for reviewed student text",
        version=__version__,
    )
    app.state.anchoring_config = config or load_anchoring_config()

    app.include_router(health_router)
    app.include_router(review_router)

    return app
