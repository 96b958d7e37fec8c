"""Loading and saving the task store as a JSON document."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict

from .errors import CorruptStoreError, StoreIOError
from .models import Store

logger = logging.getLogger(__name__)


class Persistence:
    """Handles JSON file operations for the store document."""

    @staticmethod
    def load_store(file_path: Path) -> Store:
        """Load the store, creating an empty document first if none exists."""
        if not file_path.exists():
            logger.info("No store at %s, creating an empty one", file_path)
            Persistence.save_json(file_path, Store().to_dict())

        data = Persistence.load_json(file_path)
        store = Store.from_dict(data)
        logger.debug("Loaded %d topic(s) from %s", len(store.topics), file_path)
        return store

    @staticmethod
    def save_store(store: Store, file_path: Path) -> None:
        """Rewrite the whole document at file_path."""
        Persistence.save_json(file_path, store.to_dict())
        logger.info("Saved %d topic(s) to %s", len(store.topics), file_path)

    @staticmethod
    def load_json(file_path: Path) -> Any:
        """Load JSON from file, raising StoreIOError or CorruptStoreError."""
        try:
            with file_path.open("r", encoding="utf-8") as fp:
                return json.load(fp)
        except json.JSONDecodeError as exc:
            raise CorruptStoreError(f"{file_path} is not valid JSON: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise CorruptStoreError(f"{file_path} is not valid UTF-8 text") from exc
        except RecursionError as exc:
            raise CorruptStoreError(f"{file_path} is nested too deeply to parse") from exc
        except OSError as exc:
            raise StoreIOError(f"Unable to read {file_path}: {exc}") from exc

    @staticmethod
    def save_json(file_path: Path, data: Dict[str, Any]) -> None:
        """Atomically save JSON to file."""
        try:
            Persistence.ensure_dir(file_path.parent)
            tmp_fd, tmp_path = tempfile.mkstemp(dir=file_path.parent, suffix=".tmp")
        except OSError as exc:
            raise StoreIOError(f"Unable to write {file_path}: {exc}") from exc
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2)
                fp.flush()
                os.fsync(fp.fileno())
            shutil.move(tmp_path, file_path)
        except OSError as exc:
            raise StoreIOError(f"Unable to write {file_path}: {exc}") from exc
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    @staticmethod
    def ensure_dir(dir_path: Path) -> None:
        """Create directory if it doesn't exist."""
        dir_path.mkdir(parents=True, exist_ok=True)
