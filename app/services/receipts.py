"""Receipt files: type/size validation, storage under generated names, safe lookup."""

import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO

from app.core.exceptions import InternalError, NotFoundError, ValidationError
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

# Extension -> MIME types accepted with it.
ALLOWED_RECEIPT_TYPES: dict[str, frozenset[str]] = {
    ".jpg": frozenset({"image/jpeg", "image/jpg"}),
    ".jpeg": frozenset({"image/jpeg", "image/jpg"}),
    ".png": frozenset({"image/png"}),
    ".gif": frozenset({"image/gif"}),
    ".pdf": frozenset({"application/pdf"}),
}

CHUNK_SIZE = 64 * 1024


def is_safe_filename(filename: str | None) -> bool:
    """A bare file name: no separators, no parent segments, no NUL."""
    if not filename or filename in (".", ".."):
        return False
    return not any(bad in filename for bad in ("/", "\\", "..", "\x00"))


class ReceiptStorage:
    """Receipt files kept flat in one directory, keyed by generated name."""

    def __init__(self, directory: Path, max_bytes: int) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    @property
    def max_megabytes(self) -> int:
        return max(1, self.max_bytes // (1024 * 1024))

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def check_type(self, declared_name: str, content_type: str | None) -> str:
        """Return the normalized extension if the name/MIME pair is allowed, else raise."""
        extension = os.path.splitext(declared_name or "")[1].lower()
        mime = (content_type or "").split(";")[0].strip().lower()
        allowed = ALLOWED_RECEIPT_TYPES.get(extension)
        if allowed is None or mime not in allowed:
            raise ValidationError("Only PDF and image files are allowed")
        return extension

    def check_size(self, size: int | None) -> None:
        if size is not None and size > self.max_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_megabytes} MB"
            )

    def save(self, stream: BinaryIO, extension: str) -> str:
        """
        Copy stream to a new file named uuid4-hex + extension and return that name.
        The size limit is enforced while copying; an oversize partial file is removed.
        """
        self.ensure_directory()
        filename = f"{uuid.uuid4().hex}{extension}"
        path = self.directory / filename
        written = 0
        try:
            with open(path, "xb") as out:
                while chunk := stream.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        break
                    out.write(chunk)
        except OSError as e:
            self.discard(filename)
            logger.exception("Failed to store receipt %s", filename)
            raise InternalError("Failed to store receipt") from e
        if written > self.max_bytes:
            self.discard(filename)
            self.check_size(written)
        logger.info("Receipt stored: %s (%s bytes)", filename, written)
        return filename

    def resolve(self, filename: str) -> Path:
        """Path of an existing receipt. 400 for unsafe names, 404 if there is no such file."""
        if not is_safe_filename(filename):
            raise ValidationError("Invalid filename")
        path = self.directory / filename
        if path.resolve().parent != self.directory.resolve():
            raise ValidationError("Invalid filename")
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

    def discard(self, filename: str | None) -> bool:
        """Best-effort delete; failures are logged, never raised."""
        if not filename:
            return False
        if not is_safe_filename(filename):
            logger.warning("Refusing to delete receipt with unsafe name: %r", filename)
            return False
        try:
            (self.directory / filename).unlink()
        except FileNotFoundError:
            logger.warning("Receipt file already gone: %s", filename)
            return False
        except OSError as e:
            logger.error("Error deleting receipt file %s: %s", filename, e)
            return False
        logger.info("Receipt deleted: %s", filename)
        return True


def upload_receipt(
    store: RecordStore,
    storage: ReceiptStorage,
    record_id: int,
    stream: BinaryIO,
    declared_name: str | None,
    content_type: str | None,
    size: int | None = None,
) -> str:
    """
    Store a receipt for a record and return the generated filename.

    The new file is removed if the record is missing or cannot be updated, so no
    orphan file and no stale pointer survive a failure. The previous receipt is
    removed only after the record points at the new one.
    """
    if not declared_name:
        raise ValidationError("No file uploaded")
    extension = storage.check_type(declared_name, content_type)
    storage.check_size(size)

    stored = storage.save(stream, extension)

    if store.get_by_id(record_id) is None:
        storage.discard(stored)
        raise NotFoundError("Record not found")

    try:
        previous = store.set_receipt(record_id, stored)
    except NotFoundError:
        storage.discard(stored)
        raise
    except Exception as e:
        storage.discard(stored)
        logger.exception("Failed to attach receipt %s to record %s", stored, record_id)
        raise InternalError("Failed to update record with receipt") from e

    if previous and previous != stored:
        storage.discard(previous)
    logger.info("Receipt %s attached to record %s", stored, record_id)
    return stored
