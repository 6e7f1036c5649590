"""Services Layer — game session orchestration around the pure core.

Invariants:
    - Services hold the only mutable reference to a game's current snapshot
    - Services log; core never does

Design Decisions:
    - Thin class over core commands (ADR: impureim sandwich)
"""
