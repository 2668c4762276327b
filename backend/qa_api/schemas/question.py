"""Question Schemas — create payload and the two response shapes.

Invariants:
    - QuestionCreate.text: stripped, non-empty
    - QuestionResponse never carries answers (list and create responses)
    - QuestionDetailResponse always carries answers, oldest first

Design Decisions:
    - Two response models instead of an optional field: list responses stay
      answer-free by construction rather than by omission rules
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from qa_api.schemas.answer import AnswerResponse
from qa_api.schemas.common import NonBlankStr


class QuestionCreate(BaseModel):
    """Question creation — text is required and must not be blank."""
    text: NonBlankStr


class QuestionResponse(BaseModel):
    """Question without answers — used by list and create."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    created_at: datetime


class QuestionDetailResponse(QuestionResponse):
    """Question with its answers — used by GET /questions/{id}."""
    answers: list[AnswerResponse]
