"""Schemas Layer — Pydantic models for API request/response validation.

Invariants:
    - Schemas never carry a card's category id

Design Decisions:
    - Pydantic v2 over dataclasses at the boundary: validation and OpenAPI for free
"""
