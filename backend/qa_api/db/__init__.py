"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - All ORM models inherit from db.base.Base
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""
