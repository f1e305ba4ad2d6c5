"""Input documents accepted by the CLI and HTTP adapters."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from feedback_anchoring.models.annotation import Annotation, FeedbackItem, TeacherComment


class _Request(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class ValidateAnchorsRequest(_Request):
    """Annotations to classify against one text."""

    text: Annotated[str, Field(description="Current text the offsets refer to")]
    annotations: Annotated[list[Annotation], Field(default_factory=list)]


class RenderRequest(_Request):
    """A submission to render: answers plus feedback items and teacher comments."""

    answers: Annotated[list[str], Field(min_length=1, description="Answer texts in order")]
    feedback_items: Annotated[list[FeedbackItem], Field(default_factory=list)]
    teacher_comments: Annotated[list[TeacherComment], Field(default_factory=list)]
