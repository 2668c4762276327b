"""Answers — create under a question, fetch and delete by id.

Invariants:
    - POST /questions/{id}/answers checks, in order: id, JSON, fields,
      question existence; only then writes
    - Answers are addressable without their question
    - DELETE of an absent answer is 404, not 204

Design Decisions:
    - Existence check before insert gives a clean 404; a question deleted in
      between still fails safely on the foreign key (500)
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from qa_api.api.dependencies import (
    answer_id_path, get_store, question_id_path, read_json_body,
    reported_as, validate_body,
)
from qa_api.core.domain_types import AnswerId, QuestionId
from qa_api.core.errors import NotFoundError
from qa_api.core.repository_protocols import QARepository
from qa_api.schemas.answer import AnswerCreate, AnswerResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["answers"])


@router.post(
    "/questions/{question_id}/answers", response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: QuestionId = Depends(question_id_path),
    payload: dict = Depends(read_json_body),
    store: QARepository = Depends(get_store),
):
    """Attach an answer to an existing question."""
    body = validate_body(AnswerCreate, payload)
    with reported_as("failed to create answer"):
        await store.question_exists(question_id)
        answer = await store.create_answer(
            question_id, body.user_id, body.text,
        )
    logger.info(
        "Answer created",
        extra={"question_id": question_id, "answer_id": answer.id},
    )
    return AnswerResponse.model_validate(answer)


@router.get("/answers/{answer_id}", response_model=AnswerResponse)
async def get_answer(
    answer_id: AnswerId = Depends(answer_id_path),
    store: QARepository = Depends(get_store),
):
    with reported_as("failed to get answer"):
        answer = await store.get_answer(answer_id)
    return AnswerResponse.model_validate(answer)


@router.delete("/answers/{answer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_answer(
    answer_id: AnswerId = Depends(answer_id_path),
    store: QARepository = Depends(get_store),
):
    with reported_as("failed to delete answer"):
        deleted = await store.delete_answer(answer_id)
    if not deleted:
        raise NotFoundError("answer", answer_id)
    logger.info("Answer deleted", extra={"answer_id": answer_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
