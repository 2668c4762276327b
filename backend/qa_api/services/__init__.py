"""Services Layer — persistence services used by the routes.

Invariants:
    - Services own their sessions; routes never see an AsyncSession

Design Decisions:
    - QAStorage satisfies core.repository_protocols.QARepository structurally
"""
