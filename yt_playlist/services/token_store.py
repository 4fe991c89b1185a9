"""File-backed persistence for the OAuth token."""

import json
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from yt_playlist.exceptions import StorageError
from yt_playlist.logger import storage_logger
from yt_playlist.schemas.auth import StoredToken


class TokenStore:
    """Stores a single token as JSON, replacing the file atomically on save."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> StoredToken | None:
        """
        Load the persisted token.

        Returns:
            The token, or None when nothing has been saved yet

        Raises:
            StorageError: If the file cannot be read or does not hold a token
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            storage_logger.debug("No token file at %s", self.path)
            return None
        except OSError as e:
            storage_logger.error(f"Failed to open token file. {e}")
            raise StorageError(f"Failed to open token file. {e}") from e

        try:
            token = StoredToken.model_validate_json(raw)
        except ValidationError as e:
            storage_logger.error(f"Token file {self.path} is corrupted: {e}")
            raise StorageError(f"Token file {self.path} is corrupted: {e}") from e

        storage_logger.debug("File token loaded.")
        return token

    def save(self, token: StoredToken) -> None:
        """
        Persist the token, atomically replacing any previous one.

        The JSON is written to a temporary file in the target directory,
        fsynced, then moved over the target with ``os.replace``.

        Raises:
            StorageError: If the token could not be written
        """
        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent),
                prefix=self.path.name,
                suffix=".tmp",
            )
            tmp_path = Path(tmp_name)

            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(token.model_dump(), f, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            storage_logger.error(f"Failed to save token file: {e}")
            raise StorageError(f"Failed to save token file {self.path}: {e}") from e

        storage_logger.debug("Token saved to %s", self.path)
