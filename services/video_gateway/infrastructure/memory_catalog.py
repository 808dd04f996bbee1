from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import List

from services.video_gateway.application.interfaces import IdProvider
from services.video_gateway.domain.video import VideoRecord
from services.video_gateway.infrastructure.ids import TokenIdProvider


class InMemoryVideoCatalog:
    def __init__(self, id_provider: IdProvider | None = None) -> None:
        self._lock = Lock()
        self._records: List[VideoRecord] = []
        self._id_provider = id_provider or TokenIdProvider(prefix="vid", length=16)

    def create(
        self,
        *,
        key: str,
        location: str,
        content_type: str | None = None,
        size: int | None = None,
        original_name: str | None = None,
    ) -> VideoRecord:
        now = datetime.now(timezone.utc)
        record = VideoRecord(
            video_id=self._id_provider.generate(),
            key=key,
            location=location,
            content_type=content_type,
            size=size,
            original_name=original_name,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._records.append(record)
        return record

    def get(self, video_id: str) -> VideoRecord | None:
        with self._lock:
            for record in self._records:
                if record.video_id == video_id:
                    return record
        return None

    def list(self, name_filter: str | None = None) -> List[VideoRecord]:
        with self._lock:
            if not name_filter:
                return list(self._records)
            needle = name_filter.lower()
            return [
                r
                for r in self._records
                if r.original_name is not None and needle in r.original_name.lower()
            ]
