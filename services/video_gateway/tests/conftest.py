from __future__ import annotations

import io
import itertools

import pytest
from fastapi.testclient import TestClient

from services.video_gateway.config import GatewayConfig
from services.video_gateway.domain.errors import NotFoundError, UpstreamError
from services.video_gateway.domain.video import ObjectMetadata
from services.video_gateway.infrastructure.memory_catalog import InMemoryVideoCatalog
from services.video_gateway.main import build_app


class TrackingBody(io.BytesIO):
    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.closed_by_caller = False

    def close(self) -> None:
        self.closed_by_caller = True
        super().close()


class FakeObjectStore:
    """Multipart-capable object store kept in memory.

    ``fail_on`` holds operation names that should raise ``UpstreamError``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.objects: dict[str, tuple[bytes, str | None]] = {}
        self.bodies: list[TrackingBody] = []
        self.fail_on: set[str] = set()
        self._uploads: dict[str, dict] = {}
        self._ids = itertools.count(1)

    def _record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))
        if name in self.fail_on:
            raise UpstreamError(f"{name} failed")

    def calls_named(self, name: str) -> list[dict]:
        return [kwargs for call, kwargs in self.calls if call == name]

    def create_multipart_upload(self, object_key: str, content_type: str) -> str:
        self._record("create_multipart_upload", object_key=object_key, content_type=content_type)
        upload_id = f"upload-{next(self._ids)}"
        self._uploads[upload_id] = {
            "key": object_key,
            "content_type": content_type,
            "parts": {},
        }
        return upload_id

    def upload_part(
        self, *, object_key: str, upload_id: str, part_number: int, body: bytes
    ) -> str:
        self._record(
            "upload_part",
            object_key=object_key,
            upload_id=upload_id,
            part_number=part_number,
            size=len(body),
        )
        etag = f'"etag-{part_number}-{len(body)}"'
        self._uploads[upload_id]["parts"][part_number] = (etag, body)
        return etag

    def complete_multipart_upload(
        self, *, object_key: str, upload_id: str, parts: list[tuple[int, str]]
    ) -> str:
        self._record(
            "complete_multipart_upload",
            object_key=object_key,
            upload_id=upload_id,
            parts=list(parts),
        )
        upload = self._uploads.pop(upload_id)
        data = b"".join(upload["parts"][part_no][1] for part_no, _ in parts)
        self.objects[object_key] = (data, upload["content_type"])
        return f"https://bucket.example/{object_key}"

    def abort_multipart_upload(self, *, object_key: str, upload_id: str) -> None:
        self._record("abort_multipart_upload", object_key=object_key, upload_id=upload_id)
        self._uploads.pop(upload_id, None)

    def head_object(self, object_key: str) -> ObjectMetadata:
        self._record("head_object", object_key=object_key)
        if object_key not in self.objects:
            raise NotFoundError("Video not found")
        data, content_type = self.objects[object_key]
        return ObjectMetadata(size=len(data), content_type=content_type)

    def get_object_range(self, *, object_key: str, start: int, end: int) -> TrackingBody:
        self._record("get_object_range", object_key=object_key, start=start, end=end)
        data, _ = self.objects[object_key]
        body = TrackingBody(data[start : end + 1])
        self.bodies.append(body)
        return body


class RecordingPublisher:
    def __init__(self) -> None:
        self.published = []

    def publish_video_uploaded(self, record) -> None:
        self.published.append(record)


def make_config(**overrides) -> GatewayConfig:
    values = dict(
        storage_bucket="videos",
        storage_region="us-east-1",
        storage_access_key="AK",
        storage_secret_key="SK",
        database_url="sqlite://",
    )
    values.update(overrides)
    return GatewayConfig(**values)


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def catalog() -> InMemoryVideoCatalog:
    return InMemoryVideoCatalog()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def make_client(object_store, catalog, publisher):
    def _make(**config_overrides) -> TestClient:
        app = build_app(
            make_config(**config_overrides),
            object_store=object_store,
            catalog=catalog,
            event_publisher=publisher,
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
