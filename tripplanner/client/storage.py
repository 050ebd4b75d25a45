"""
On-device persistence for the client: one JSON blob per key.
"""
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tripplanner.core.config import settings
from tripplanner.schemas.state import StateSnapshot

logger = logging.getLogger(__name__)

STATE_KEY = "travel-app-state"
QUEUE_KEY = "travel-app-offline-queue"


class LocalStorage:
    """Key/value store of serialized blobs, one file per key under a directory."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Stored text for key, or None when nothing (readable) is stored."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

    def set_item(self, key: str, value: str) -> bool:
        """Write value for key. Failures are logged and reported as False."""
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.warning(f"Could not write {path}: {e}")
            return False
        return True

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove {key}: {e}")


def load_state(storage: LocalStorage) -> Optional[StateSnapshot]:
    """Persisted entity collections, or None if nothing valid was saved."""
    raw = storage.get_item(STATE_KEY)
    if raw is None:
        return None
    try:
        return StateSnapshot.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed saved state: {e.error_count()} errors")
        return None


def save_state(
    storage: LocalStorage,
    state: StateSnapshot,
    max_file_url_length: int = settings.MAX_DOCUMENT_FILE_URL_LENGTH,
) -> bool:
    """
    Persist every entity collection.

    Document content embedded in fileUrl is dropped (fileUrl = "") when it
    is longer than max_file_url_length; the rest of the document is kept.
    """
    documents = [
        doc.model_copy(update={"file_url": ""}) if len(doc.file_url) > max_file_url_length else doc
        for doc in state.documents
    ]
    to_save = state.model_copy(update={"documents": documents})
    return storage.set_item(STATE_KEY, to_save.model_dump_json(by_alias=True))
