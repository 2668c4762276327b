"""Answer Schemas — create payload and response shape.

Invariants:
    - AnswerCreate.user_id: stripped, non-empty, at most 64 characters
    - AnswerCreate.text: stripped, non-empty
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from qa_api.models.answer import USER_ID_MAX_LENGTH
from qa_api.schemas.common import NonBlankStr


class AnswerCreate(BaseModel):
    """Answer creation — both fields required and non-blank."""
    user_id: NonBlankStr
    text: NonBlankStr

    @field_validator("user_id")
    @classmethod
    def check_user_id_length(cls, v: str) -> str:
        if len(v) > USER_ID_MAX_LENGTH:
            raise PydanticCustomError(
                "too_long",
                "user_id must be at most {max_length} characters",
                {"max_length": USER_ID_MAX_LENGTH},
            )
        return v


class AnswerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    user_id: str
    text: str
    created_at: datetime
