"""Core Layer — error kinds, identity types and storage contracts. No IO.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
    - Everything here is importable without a database or an event loop

Design Decisions:
    - Functional core separated from imperative shell: routes and storage
      depend on core, never the other way round
"""
