"""Answer ORM — a response owned by exactly one question.

Invariants:
    - question_id references questions.id with ON DELETE CASCADE
    - user_id is at most 64 characters
    - Immutable once created (no update path exists)

Design Decisions:
    - question_id indexed: detail fetch and cascade delete both filter on it
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qa_api.db.base import Base, IdType

USER_ID_MAX_LENGTH = 64


class Answer(Base):
    """Answer entity — addressable on its own, deleted with its question."""
    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(
        IdType, primary_key=True, autoincrement=True,
    )
    question_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(USER_ID_MAX_LENGTH), nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    question: Mapped["Question"] = relationship(
        "Question", back_populates="answers",
    )
