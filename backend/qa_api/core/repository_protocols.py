"""Boundary Protocols — the storage contract routes depend on.

Invariants:
    - list_questions orders newest first and never loads answers
    - get_question_with_answers loads answers oldest first
    - delete_question removes the question's answers in the same transaction
    - get_* and question_exists raise NotFoundError for a missing row
    - delete_* never raise for a missing row; they return False instead

Design Decisions:
    - Protocol over ABC: structural subtyping, any backing store that honours
      the ordering and cascade rules above can stand in for QAStorage
"""

from typing import Protocol

from qa_api.core.domain_types import QuestionId, AnswerId


class QuestionLike(Protocol):
    """Structural contract for question records returned by a repository."""
    id: int
    text: str
    answers: list


class AnswerLike(Protocol):
    """Structural contract for answer records returned by a repository."""
    id: int
    question_id: int
    user_id: str
    text: str


class QARepository(Protocol):
    """Contract for question/answer persistence — implemented by shell."""
    async def create_question(self, text: str) -> QuestionLike: ...
    async def list_questions(self) -> list[QuestionLike]: ...
    async def get_question_with_answers(
        self, question_id: QuestionId,
    ) -> QuestionLike: ...
    async def delete_question(self, question_id: QuestionId) -> bool: ...
    async def create_answer(
        self, question_id: QuestionId, user_id: str, text: str,
    ) -> AnswerLike: ...
    async def get_answer(self, answer_id: AnswerId) -> AnswerLike: ...
    async def delete_answer(self, answer_id: AnswerId) -> bool: ...
    async def question_exists(self, question_id: QuestionId) -> None: ...
