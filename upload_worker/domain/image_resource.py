"""Staged image files handed to the uploader."""

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Callable

from upload_worker.domain.exceptions import ResourceCleanupFailed
from upload_worker.utils.temp_files import delete_temp_file


class TempFileImageResource(AbstractContextManager):
    """Owns a staged temporary image and deletes it on close.

    The uploader reads ``path``; the owner must call ``close`` once the upload
    attempt is over, whatever its result. Only the first call deletes.
    """

    def __init__(
        self,
        temp_path: str | Path,
        deleter: Callable[[Path], None] = delete_temp_file,
    ):
        self._path = Path(temp_path)
        self._deleter = deleter
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._deleter(self._path)
        except (OSError, ValueError) as e:
            raise ResourceCleanupFailed(str(self._path), e) from e

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return None

    def __repr__(self) -> str:
        return f"TempFileImageResource(path={str(self._path)!r})"
