"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - Routes never contain SQL (delegate to QAStorage)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
