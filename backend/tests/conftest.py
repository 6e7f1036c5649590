"""Root conftest — shared test configuration."""

import os

# Tests never read a developer's dataset or .env overrides
os.environ.setdefault("CARDSORT_LOG_FORMAT", "text")
os.environ.setdefault("CARDSORT_DATASET_PATH", "")
