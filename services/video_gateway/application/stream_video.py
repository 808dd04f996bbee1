from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator

from services.video_gateway.application.dto import StreamVideoCommand
from services.video_gateway.application.interfaces import (
    ObjectBody,
    ObjectStoreClient,
    VideoCatalog,
)
from services.video_gateway.domain.errors import NotFoundError, UpstreamError
from services.video_gateway.domain.stream import (
    DEFAULT_OCTET_STREAM,
    DEFAULT_WINDOW_SIZE,
    ByteWindow,
    compute_window,
    parse_range_start,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StreamedRange:
    window: ByteWindow
    content_type: str
    body: ObjectBody

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Range": self.window.content_range,
            "Accept-Ranges": "bytes",
            "Content-Length": str(self.window.content_length),
            "Content-Type": self.content_type,
        }


class StreamVideoUseCase:
    """Resolves a catalog id and opens one bounded ranged read for it.

    The window is always sized by the gateway: it starts at the requested
    offset and spans at most ``window_size`` bytes, whatever end the client
    asked for. Requests without a Range header are refused so that no single
    response carries the whole object.
    """

    def __init__(
        self,
        *,
        catalog: VideoCatalog,
        object_store: ObjectStoreClient,
        window_size: int = DEFAULT_WINDOW_SIZE,
    ) -> None:
        if window_size < 1:
            raise ValueError("window_size must be positive")
        self._catalog = catalog
        self._object_store = object_store
        self._window_size = window_size

    def execute(self, command: StreamVideoCommand) -> StreamedRange:
        record = self._catalog.get(command.video_id)
        if record is None:
            raise NotFoundError("Video not found")

        start = parse_range_start(command.range_header)

        try:
            metadata = self._object_store.head_object(record.key)
        except UpstreamError:
            LOGGER.error("Failed to probe %s for video %s", record.key, record.video_id)
            raise

        window = compute_window(start, metadata.size, self._window_size)

        try:
            body = self._object_store.get_object_range(
                object_key=record.key, start=window.start, end=window.end
            )
        except UpstreamError:
            LOGGER.error(
                "Failed to read %s of %s for video %s",
                window.content_range,
                record.key,
                record.video_id,
            )
            raise

        LOGGER.info("Streaming video %s %s", record.video_id, window.content_range)
        return StreamedRange(
            window=window,
            content_type=metadata.content_type or DEFAULT_OCTET_STREAM,
            body=body,
        )


async def iter_body(
    body: ObjectBody, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> AsyncIterator[bytes]:
    """Yield ``body`` in chunks, reading each one off the event loop.

    The body is closed when the iterator finishes, fails, or is cancelled by
    a client disconnect, which abandons the remainder of the ranged read.
    """
    try:
        while True:
            chunk = await asyncio.to_thread(body.read, chunk_size)
            if not chunk:
                break
            yield chunk
    except asyncio.CancelledError:
        LOGGER.info("Client went away; abandoning ranged read")
        raise
    except Exception:
        LOGGER.exception("Ranged read failed mid-stream; response will be truncated")
        raise
    finally:
        body.close()
