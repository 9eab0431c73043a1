"""
upload_store.py - Ephemeral storage for uploaded documents

Uploads live on disk only for the duration of the request that received
them. ``UploadStore.hold`` ties the deletion of one upload to one ``with``
block so every exit path releases the file exactly once.
"""

import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from werkzeug.datastructures import FileStorage

from .models import UploadedDocument

_LOG = logging.getLogger("upload_store")


class UploadStore:
    """File-system backed store for request-scoped uploads."""

    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save(self, upload: FileStorage) -> UploadedDocument:
        """Write *upload* under a random name and return its handle."""
        file_path = self.upload_dir / uuid.uuid4().hex
        try:
            upload.save(str(file_path))
        except Exception:
            self.delete(file_path)
            raise
        _LOG.debug("Stored upload %s as %s", upload.filename, file_path.name)
        return UploadedDocument(
            file_path=file_path,
            mime_type=upload.mimetype or "",
            original_filename=upload.filename,
        )

    def delete(self, file_path: Path) -> bool:
        """Remove a stored upload. A missing file is not an error.

        Returns:
            True if a file was removed, False if it was already gone
        """
        try:
            Path(file_path).unlink()
        except FileNotFoundError:
            _LOG.debug("Upload already removed: %s", file_path)
            return False
        _LOG.debug("Removed upload %s", file_path)
        return True

    @contextmanager
    def hold(self, document: UploadedDocument) -> Iterator[UploadedDocument]:
        """Yield *document* and delete its file when the block exits."""
        try:
            yield document
        finally:
            try:
                self.delete(document.file_path)
            except OSError as e:
                _LOG.error("Error deleting temporary file %s: %s", document.file_path, e)

    def residual_files(self) -> List[Path]:
        """Files currently held in the store."""
        if not self.upload_dir.exists():
            return []
        return sorted(p for p in self.upload_dir.iterdir() if p.is_file())
