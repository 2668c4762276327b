"""API Layer — FastAPI routes, request dependencies, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; errors always as {"error": string}

Design Decisions:
    - Thin routes delegate to QAStorage; parsing lives in dependencies.py
"""
