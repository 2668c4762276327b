"""Questions — create, list, fetch-with-answers and delete.

Invariants:
    - Path id parsed (400) before any storage access
    - List responses never include answers; detail responses always do
    - DELETE of an absent question is 404, not 204
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from qa_api.api.dependencies import (
    get_store, question_id_path, read_json_body, reported_as, validate_body,
)
from qa_api.core.domain_types import QuestionId
from qa_api.core.errors import NotFoundError
from qa_api.core.repository_protocols import QARepository
from qa_api.schemas.question import (
    QuestionCreate, QuestionResponse, QuestionDetailResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=list[QuestionResponse])
async def list_questions(store: QARepository = Depends(get_store)):
    """All questions, newest first, without answers."""
    with reported_as("failed to list questions"):
        questions = await store.list_questions()
    return [QuestionResponse.model_validate(q) for q in questions]


@router.post(
    "", response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    payload: dict = Depends(read_json_body),
    store: QARepository = Depends(get_store),
):
    body = validate_body(QuestionCreate, payload)
    with reported_as("failed to create question"):
        question = await store.create_question(body.text)
    logger.info("Question created", extra={"question_id": question.id})
    return QuestionResponse.model_validate(question)


@router.get("/{question_id}", response_model=QuestionDetailResponse)
async def get_question(
    question_id: QuestionId = Depends(question_id_path),
    store: QARepository = Depends(get_store),
):
    """Question with its answers, oldest answer first."""
    with reported_as("failed to get question"):
        question = await store.get_question_with_answers(question_id)
    return QuestionDetailResponse.model_validate(question)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: QuestionId = Depends(question_id_path),
    store: QARepository = Depends(get_store),
):
    """Delete a question; its answers go with it."""
    with reported_as("failed to delete question"):
        deleted = await store.delete_question(question_id)
    if not deleted:
        raise NotFoundError("question", question_id)
    logger.info("Question deleted", extra={"question_id": question_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
