"""Core Layer — pure game logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure; randomness only through an injected rng

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
