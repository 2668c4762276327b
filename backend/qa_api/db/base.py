"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Every id column is IdType: BIGINT, so any id parse_id() accepts fits

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - IdType falls back to INTEGER on SQLite: only an INTEGER PRIMARY KEY
      aliases the 64-bit rowid and autoincrements there
"""

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

IdType = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """Base class for all Q&A ORM models."""
    pass
