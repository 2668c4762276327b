"""Infrastructure Layer — database session management and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - Every database failure leaves this layer as PersistenceError

Design Decisions:
    - Thin wrappers over SQLAlchemy and logging, configured once at startup
"""
