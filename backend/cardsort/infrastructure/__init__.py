"""Infrastructure Layer — file IO, process-wide singletons, logging setup.

Invariants:
    - Only this layer touches the filesystem
    - Errors are mapped to core/errors.py types before leaving the layer

Design Decisions:
    - Singletons initialized from the FastAPI lifespan, never at import time
"""
