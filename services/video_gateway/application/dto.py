from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class BeginUploadCommand:
    file_name: str
    file_type: str


@dataclass(frozen=True)
class UploadPartCommand:
    upload_id: str
    object_key: str
    part_index: int
    payload: bytes


@dataclass(frozen=True)
class CompletionPart:
    part_number: int
    etag: str


@dataclass(frozen=True)
class CompleteUploadCommand:
    upload_id: str
    object_key: str
    parts: List[CompletionPart]
    display_name: Optional[str] = None


@dataclass(frozen=True)
class AbortUploadCommand:
    upload_id: str
    object_key: str


@dataclass(frozen=True)
class StreamVideoCommand:
    video_id: str
    range_header: Optional[str]
