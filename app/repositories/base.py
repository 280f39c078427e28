"""Base storage layer for the URL shortener application.

This module provides the repository exception hierarchy and JSONDocumentStore,
the file-backed document that concrete repositories read and rewrite whole.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Union

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique field is already taken."""

    def __init__(self, field_name: str, value: Any):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Record with {field_name}={value} already exists")


class StorageReadError(RepositoryError):
    """Persisted state could not be read or decoded."""

    def __init__(self, path: Path, reason: Any):
        self.path = path
        super().__init__(f"Failed to read store {path}: {reason}")


class StorageWriteError(RepositoryError):
    """Persisted state could not be written."""

    def __init__(self, path: Path, reason: Any):
        self.path = path
        super().__init__(f"Failed to write store {path}: {reason}")


class JSONDocumentStore:
    """
    A single JSON document on disk.

    Reads return the whole document; writes replace it atomically by writing
    a sibling temporary file and renaming it over the target, so a reader
    never sees a half-written file. Both calls are blocking and are meant to
    be run off the event loop.
    """

    def __init__(self, path: Union[str, Path], default_factory: Callable[[], Dict[str, Any]]):
        """
        Initialize the document store.

        Args:
            path: Location of the JSON document
            default_factory: Builds the document used when the file does not exist
        """
        self.path = Path(path)
        self.default_factory = default_factory

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Dict[str, Any]:
        """
        Read and decode the document.

        Returns:
            The decoded document, or a fresh default one if the file is missing

        Raises:
            StorageReadError: If the file cannot be read or is not a JSON object
        """
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return self.default_factory()
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {self.path}: {e}")
            raise StorageReadError(self.path, e) from e

        if not isinstance(data, dict):
            raise StorageReadError(self.path, "document root is not an object")
        return data

    def write(self, data: Dict[str, Any]) -> None:
        """
        Replace the document on disk.

        Raises:
            StorageWriteError: If the document cannot be serialized or written
        """
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing {self.path}: {e}")
            raise StorageWriteError(self.path, e) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning(f"Could not remove temporary file {tmp_name}")
