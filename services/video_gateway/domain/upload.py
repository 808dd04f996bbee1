from __future__ import annotations

from dataclasses import dataclass

# S3 caps a multipart upload at 10,000 parts.
MAX_PART_NUMBER = 10_000


@dataclass(frozen=True)
class UploadSession:
    upload_id: str
    object_key: str


@dataclass(frozen=True)
class UploadedPart:
    part_number: int
    etag: str


@dataclass(frozen=True)
class CompletedUpload:
    video_id: str
    upload_id: str
    object_key: str
    location: str
