"""
Local disk storage for uploaded document files.

Files live under ``<upload_dir>/<law_firm_id>/`` with a generated name so
user-supplied names never reach the filesystem. Validation covers the MIME
allow-list, empty files and the configured size ceiling.
"""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from lawdesk.core.config import get_settings
from lawdesk.core.errors import BadRequestError, NotFoundError, PayloadTooLargeError
from lawdesk.core.hashing import sha256_bytes
from lawdesk.core.logging import get_logger

__all__ = ["StoredFile", "DocumentStorage", "get_document_storage"]

log = get_logger(__name__)


@dataclass(frozen=True)
class StoredFile:
    path: str
    file_name: str
    file_size: int
    mime_type: str
    checksum: str


class DocumentStorage:
    """
    Validates and persists uploaded files on the local filesystem.
    """

    def __init__(
        self,
        upload_dir: str,
        max_bytes: int,
        allowed_mime_types: Iterable[str],
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.max_bytes = int(max_bytes)
        self.allowed_mime_types = frozenset(m.strip().lower() for m in allowed_mime_types if m.strip())

    def _firm_dir(self, law_firm_id: int) -> Path:
        path = self.upload_dir / str(int(law_firm_id))
        path.mkdir(parents=True, exist_ok=True)
        return path

    def validate_type(self, mime_type: Optional[str]) -> str:
        normalized = (mime_type or "").split(";")[0].strip().lower()
        if normalized not in self.allowed_mime_types:
            raise BadRequestError(
                "Invalid file type",
                details={"mime_type": normalized, "allowed": sorted(self.allowed_mime_types)},
            )
        return normalized

    def read_limited(self, stream: BinaryIO) -> bytes:
        """Read an upload, refusing anything larger than the configured ceiling."""
        data = stream.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise PayloadTooLargeError(
                "File too large",
                details={"max_bytes": self.max_bytes},
            )
        if not data:
            raise BadRequestError("File is empty")
        return data

    def save(
        self,
        *,
        law_firm_id: int,
        original_name: Optional[str],
        mime_type: Optional[str],
        stream: BinaryIO,
    ) -> StoredFile:
        """
        Validate and write an upload. Returns what the document row needs.
        """
        normalized_type = self.validate_type(mime_type)
        data = self.read_limited(stream)

        file_name = os.path.basename(original_name or "") or "document"
        ext = os.path.splitext(file_name)[1].lower()
        target = self._firm_dir(law_firm_id) / f"{uuid.uuid4().hex}{ext}"
        with open(target, "wb") as fh:
            fh.write(data)

        log.debug("file stored", extra={"path": str(target), "size": len(data)})
        return StoredFile(
            path=str(target),
            file_name=file_name,
            file_size=len(data),
            mime_type=normalized_type,
            checksum=sha256_bytes(data),
        )

    def resolve(self, path: str) -> Path:
        target = Path(path)
        if not target.is_file():
            raise NotFoundError("File not found on server")
        return target

    def delete(self, path: str) -> bool:
        """Remove a stored file; returns False when it was already gone."""
        target = Path(path)
        try:
            target.unlink()
        except FileNotFoundError:
            log.warning("stored file missing on delete", extra={"path": path})
            return False
        return True


def get_document_storage() -> DocumentStorage:
    settings = get_settings()
    return DocumentStorage(
        upload_dir=settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
        allowed_mime_types=settings.allowed_mime_types,
    )
