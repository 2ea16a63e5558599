import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from conference_portal.core.errors import PayloadTooLarge, UnsupportedMediaType
from conference_portal.core.security import generate_id

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    kind: str
    allowed_types: Tuple[str, ...]  # substrings matched against the MIME type
    max_size_mb: int
    type_error: str

    @property
    def max_bytes(self) -> int:
        return self.max_size_mb * MB


def paper_policy(max_size_mb: int = 20) -> UploadPolicy:
    return UploadPolicy("paper", ("pdf",), max_size_mb, "Only PDF uploads are allowed")


def proof_policy(max_size_mb: int = 10) -> UploadPolicy:
    return UploadPolicy(
        "payment proof", ("image", "pdf"), max_size_mb, "Only image or PDF uploads are allowed"
    )


@dataclass
class IncomingFile:
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes

    @property
    def is_empty(self) -> bool:
        return not self.filename and not self.data


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original: Optional[str]


def url_for(filename: Optional[str]) -> Optional[str]:
    return f"/uploads/{filename}" if filename else None


class UploadHandler:
    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)

    def validate(self, upload: IncomingFile, policy: UploadPolicy):
        content_type = (upload.content_type or "").lower()
        if not any(t in content_type for t in policy.allowed_types):
            logger.warning(f"Rejected {policy.kind} upload '{upload.filename}': type {content_type!r}")
            raise UnsupportedMediaType(policy.type_error)

        if len(upload.data) > policy.max_bytes:
            logger.warning(f"Rejected {policy.kind} upload '{upload.filename}': over {policy.max_size_mb}MB")
            raise PayloadTooLarge(f"File too large (max {policy.max_size_mb}MB)")

    def store(self, upload: IncomingFile, policy: UploadPolicy) -> StoredFile:
        """Validate and write an upload under a generated name"""
        self.validate(upload, policy)

        ext = os.path.splitext(upload.filename or "")[1].lower()
        if not ext[1:].isalnum():
            ext = ".pdf"
        filename = generate_id() + ext

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / filename).write_bytes(upload.data)

        logger.info(f"📎 Stored {policy.kind} '{upload.filename}' as {filename} ({len(upload.data)} bytes)")
        return StoredFile(filename=filename, original=upload.filename)
