from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class VideoRecord:
    video_id: str
    key: str
    location: str
    created_at: datetime
    updated_at: datetime
    content_type: Optional[str] = None
    size: Optional[int] = None
    original_name: Optional[str] = None


@dataclass(frozen=True)
class ObjectMetadata:
    size: int
    content_type: Optional[str] = None
