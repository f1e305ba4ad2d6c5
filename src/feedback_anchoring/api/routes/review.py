"""Review routes - stateless anchor validation and submission rendering.

Provides:
- POST /v1/anchors/validate (Classify anchors against a text)
- POST /v1/review/render (Render a submission to paragraphs of segments)

Both operate on the request body only: no persistence, no outbound calls.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request

from feedback_anchoring.config import AnchoringConfig
from feedback_anchoring.models.requests import RenderRequest, ValidateAnchorsRequest
from feedback_anchoring.services.anchoring.validator import validate_anchors
from feedback_anchoring.services.review.payload import session_to_dict, statuses_to_dict
from feedback_anchoring.services.review.session import ReviewSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Review"])


def _config(request: Request) -> AnchoringConfig:
    config: AnchoringConfig = request.app.state.anchoring_config
    return config


@router.post("/anchors/validate")
def post_validate_anchors(body: ValidateAnchorsRequest, request: Request) -> dict[str, Any]:
    """Classify every annotation's anchor against the given text."""
    statuses = validate_anchors(body.annotations, body.text, config=_config(request))
    return {"statuses": statuses_to_dict(statuses)}


@router.post("/review/render")
def post_render(body: RenderRequest, request: Request) -> dict[str, Any]:
    """Render a submission: anchor statuses plus per-answer paragraphs."""
    with ReviewSession(config=_config(request)) as session:
        session.load_submission(body.answers, body.feedback_items, body.teacher_comments)
        return session_to_dict(session)
