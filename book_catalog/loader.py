"""
Dataset Loader

Reads the JSON book dataset from disk at startup and fills a
CatalogStore with it. Three shapes are accepted:

    [{"isbn": "...", "title": "...", "author": "..."}, ...]
    {"books": [{"isbn": "...", ...}, ...]}
    {"<isbn>": {"title": "...", "author": "..."}, ...}

Any failure here is an InvalidDatasetError: the service cannot run
without a catalog, so the caller lets it abort startup.
"""

import json
import logging
from pathlib import Path
from typing import Any

from book_catalog.exceptions import InvalidDatasetError
from book_catalog.store import CatalogStore

logger = logging.getLogger(__name__)


def read_dataset(path: Path) -> Any:
    """
    Parse the dataset file.

    Raises:
        InvalidDatasetError: If the file is missing, unreadable or not JSON
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise InvalidDatasetError(f"Books dataset not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidDatasetError(f"Cannot read books dataset {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InvalidDatasetError(f"Books dataset {path} is not valid JSON: {e}") from e


def unwrap_records(raw: Any) -> Any:
    """Strip the optional {"books": [...]} envelope."""
    if isinstance(raw, dict) and isinstance(raw.get("books"), list):
        return raw["books"]
    return raw


def load_catalog(path: Path, store: CatalogStore | None = None) -> CatalogStore:
    """
    Build a CatalogStore from the dataset at path.

    Args:
        path: JSON dataset location
        store: Existing store to fill; a new one is created when omitted

    Returns:
        The loaded store
    """
    if store is None:
        store = CatalogStore()
    logger.info(f"Loading books dataset from {path}")
    store.load(unwrap_records(read_dataset(path)))
    return store
