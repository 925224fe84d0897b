"""Single-file JSON cache for the content snapshot."""

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from portfolio.errors import CacheIOError, DecodingError, EncodingError
from portfolio.models.content import ContentSnapshot

logger = logging.getLogger(__name__)

CACHE_FILE_MODE = 0o644


class SnapshotStore:
    """Load and save a ContentSnapshot as indented JSON in one named file.

    Saves go through a temp file in the same directory that is renamed over
    the target, so readers see either the old or the new file, never a
    partial one. Loads are all-or-nothing.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, snapshot: ContentSnapshot) -> None:
        """Write *snapshot* to the cache file, replacing previous contents.

        Raises:
            EncodingError: If the snapshot cannot be serialized.
            CacheIOError: If the file cannot be created or written.
        """
        try:
            data = snapshot.model_dump_json(indent=2)
        except PydanticSerializationError as e:
            raise EncodingError(f"could not encode snapshot: {e}") from e

        dir_path = self._path.parent
        temp_path: Path | None = None
        try:
            dir_path.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=dir_path,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as f:
                temp_path = Path(f.name)
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            # Temp files start out 0600
            os.chmod(temp_path, CACHE_FILE_MODE)
            os.replace(temp_path, self._path)
        except OSError as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise CacheIOError(f"could not write {self._path}: {e}") from e

        logger.debug("Saved snapshot to %s", self._path)

    def load(self) -> ContentSnapshot:
        """Read and decode the cache file.

        Raises:
            CacheIOError: If the file is missing or unreadable.
            DecodingError: If the contents are not a valid snapshot.
        """
        try:
            raw = self._path.read_bytes()
        except OSError as e:
            raise CacheIOError(f"could not open {self._path}: {e}") from e

        try:
            return ContentSnapshot.model_validate_json(raw)
        except PydanticValidationError as e:
            raise DecodingError(f"could not decode {self._path}: {e}") from e
