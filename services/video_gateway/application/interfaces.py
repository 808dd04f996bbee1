from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from services.video_gateway.domain.video import ObjectMetadata, VideoRecord


class IdProvider(Protocol):
    def generate(self) -> str: ...


class ObjectBody(Protocol):
    def read(self, amt: int | None = None) -> bytes: ...

    def close(self) -> None: ...


class ObjectStoreClient(Protocol):
    def create_multipart_upload(self, object_key: str, content_type: str) -> str: ...

    def upload_part(
        self, *, object_key: str, upload_id: str, part_number: int, body: bytes
    ) -> str: ...

    def complete_multipart_upload(
        self, *, object_key: str, upload_id: str, parts: list[tuple[int, str]]
    ) -> str: ...

    def abort_multipart_upload(self, *, object_key: str, upload_id: str) -> None: ...

    def head_object(self, object_key: str) -> "ObjectMetadata": ...

    def get_object_range(
        self, *, object_key: str, start: int, end: int
    ) -> ObjectBody: ...


class VideoCatalog(Protocol):
    def create(
        self,
        *,
        key: str,
        location: str,
        content_type: str | None = None,
        size: int | None = None,
        original_name: str | None = None,
    ) -> "VideoRecord": ...

    def get(self, video_id: str) -> "VideoRecord" | None: ...

    def list(self, name_filter: str | None = None) -> list["VideoRecord"]: ...


class VideoEventPublisher(Protocol):
    def publish_video_uploaded(self, record: "VideoRecord") -> None: ...
