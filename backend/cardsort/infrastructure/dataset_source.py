"""Dataset Source — reads the raw categorized dataset from disk.

Invariants:
    - Returns the parsed document untouched; validation belongs to core/dataset_loader
    - Missing file -> DatasetNotFoundError; undecodable or unparseable file -> DatasetParseError
    - .yaml/.yml parsed with yaml.safe_load, .json with json.load

Design Decisions:
    - safe_load only: a dataset is data, never arbitrary Python objects
"""

import json
import logging
from pathlib import Path

import yaml

from cardsort.core.errors import DatasetNotFoundError, DatasetParseError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def read_dataset_file(path: str | Path) -> object:
    """Load and parse a dataset file. Raises on missing or malformed files."""
    dataset_path = Path(path)
    if not dataset_path.is_file():
        raise DatasetNotFoundError(str(dataset_path))

    try:
        text = dataset_path.read_text(encoding="utf-8")
        if dataset_path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        logger.error(
            f"Dataset parse failure: {e}",
            extra={"dataset_path": str(dataset_path)},
        )
        raise DatasetParseError(str(dataset_path), str(e)) from e

    logger.info(
        "Dataset file read",
        extra={"dataset_path": str(dataset_path)},
    )
    return data


def write_dataset_file(data: dict, path: str | Path) -> Path:
    """Write a raw dataset as YAML (or JSON for a .json suffix)."""
    dataset_path = Path(path)
    dataset_path.parent.mkdir(parents=True, exist_ok=True)
    if dataset_path.suffix.lower() == ".json":
        dataset_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    else:
        dataset_path.write_text(
            yaml.safe_dump(data, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
    return dataset_path
