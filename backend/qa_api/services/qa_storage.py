"""QA Storage — question/answer persistence over the async session manager.

Invariants:
    - Every operation runs in its own session and transaction
    - Every operation is bounded by operation_timeout; on expiry the session is
      rolled back and PersistenceError is raised (never a partial write)
    - Task cancellation propagates unchanged after the session is closed
    - list_questions never loads answers; get_question_with_answers always does
    - delete_question removes answers and question in one transaction

Design Decisions:
    - Session manager injected at construction (no module-level db handle)
    - Cascade done with explicit DELETE statements as well as the FK action,
      so backends that ignore ON DELETE still lose the answers
    - Deletes report whether a row went away; the HTTP layer decides 404
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qa_api.core.domain_types import QuestionId, AnswerId
from qa_api.core.errors import NotFoundError, PersistenceError
from qa_api.infrastructure.database import DatabaseSessionManager
from qa_api.models.answer import Answer
from qa_api.models.question import Question

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QAStorage:
    """Create/list/get/delete for questions and answers."""

    def __init__(
        self, db: DatabaseSessionManager, operation_timeout: float = 5.0,
    ):
        self._db = db
        self._timeout = operation_timeout

    async def _run(
        self, operation: str, work: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        """Run work inside a fresh session under the operation deadline."""
        try:
            async with asyncio.timeout(self._timeout):
                async with self._db.session() as session:
                    return await work(session)
        except TimeoutError as e:
            logger.error(
                f"{operation} exceeded {self._timeout}s deadline",
                extra={"operation": operation},
            )
            raise PersistenceError("operation timed out", operation, e) from e

    # ─── Questions ──────────────────────────────────────────────

    async def create_question(self, text: str) -> Question:
        async def work(session: AsyncSession) -> Question:
            question = Question(text=text)
            session.add(question)
            await session.commit()
            await session.refresh(question)
            return question

        return await self._run("create_question", work)

    async def list_questions(self) -> list[Question]:
        """All questions, newest first, answers not loaded."""
        async def work(session: AsyncSession) -> list[Question]:
            result = await session.execute(
                select(Question).order_by(
                    Question.created_at.desc(), Question.id.desc(),
                ),
            )
            return list(result.scalars().all())

        return await self._run("list_questions", work)

    async def get_question_with_answers(
        self, question_id: QuestionId,
    ) -> Question:
        """Question with answers oldest first. Raises NotFoundError."""
        async def work(session: AsyncSession) -> Question:
            result = await session.execute(
                select(Question)
                .options(selectinload(Question.answers))
                .where(Question.id == question_id),
            )
            question = result.scalar_one_or_none()
            if question is None:
                raise NotFoundError("question", question_id)
            return question

        return await self._run("get_question_with_answers", work)

    async def delete_question(self, question_id: QuestionId) -> bool:
        """Delete the question and its answers. False if it did not exist."""
        async def work(session: AsyncSession) -> bool:
            await session.execute(
                delete(Answer).where(Answer.question_id == question_id),
            )
            result = await session.execute(
                delete(Question).where(Question.id == question_id),
            )
            await session.commit()
            return result.rowcount > 0

        return await self._run("delete_question", work)

    async def question_exists(self, question_id: QuestionId) -> None:
        """Raise NotFoundError unless a question with this id exists."""
        async def work(session: AsyncSession) -> None:
            result = await session.execute(
                select(Question.id).where(Question.id == question_id),
            )
            if result.scalar_one_or_none() is None:
                raise NotFoundError("question", question_id)

        await self._run("question_exists", work)

    # ─── Answers ────────────────────────────────────────────────

    async def create_answer(
        self, question_id: QuestionId, user_id: str, text: str,
    ) -> Answer:
        async def work(session: AsyncSession) -> Answer:
            answer = Answer(question_id=question_id, user_id=user_id, text=text)
            session.add(answer)
            await session.commit()
            await session.refresh(answer)
            return answer

        return await self._run("create_answer", work)

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        async def work(session: AsyncSession) -> Answer:
            answer = await session.get(Answer, answer_id)
            if answer is None:
                raise NotFoundError("answer", answer_id)
            return answer

        return await self._run("get_answer", work)

    async def delete_answer(self, answer_id: AnswerId) -> bool:
        async def work(session: AsyncSession) -> bool:
            result = await session.execute(
                delete(Answer).where(Answer.id == answer_id),
            )
            await session.commit()
            return result.rowcount > 0

        return await self._run("delete_answer", work)
