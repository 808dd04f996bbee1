from __future__ import annotations

from services.video_gateway.application.interfaces import VideoCatalog
from services.video_gateway.domain.video import VideoRecord


class ListVideosUseCase:
    def __init__(self, catalog: VideoCatalog) -> None:
        self._catalog = catalog

    def execute(self, name_filter: str | None = None) -> list[VideoRecord]:
        name_filter = (name_filter or "").strip() or None
        return list(self._catalog.list(name_filter))
