"""Question ORM — the aggregate root a user wants answered.

Invariants:
    - id is an autoincrement 64-bit integer primary key
    - text is non-nullable
    - answers, when loaded, are ordered by created_at then id (ascending)

Design Decisions:
    - lazy="raise": answers are only ever loaded explicitly (selectinload),
      so listing questions can never trigger an implicit query in async context
    - passive_deletes with ON DELETE CASCADE on the FK: the database removes
      children, the ORM does not try to null them out
"""

from datetime import datetime, timezone

from sqlalchemy import Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qa_api.db.base import Base, IdType


class Question(Base):
    """Question aggregate root — owns its answers."""
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(
        IdType, primary_key=True, autoincrement=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    answers: Mapped[list["Answer"]] = relationship(
        "Answer", back_populates="question",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="[Answer.created_at, Answer.id]",
        lazy="raise",
    )
