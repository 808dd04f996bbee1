"""Routes for streaming stored videos and browsing the catalog."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from fastapi import APIRouter, Header
from fastapi.responses import PlainTextResponse, StreamingResponse
from pydantic import BaseModel

from services.video_gateway.application.dto import StreamVideoCommand
from services.video_gateway.application.list_videos import ListVideosUseCase
from services.video_gateway.application.stream_video import (
    DEFAULT_CHUNK_SIZE,
    StreamVideoUseCase,
    iter_body,
)
from services.video_gateway.domain.video import VideoRecord


def _isoformat(value) -> str:
    return value.isoformat().replace("+00:00", "Z")


class VideoRecordPayload(BaseModel):
    """Catalog entry as exposed to clients."""

    id: str
    key: str
    location: str
    contentType: Optional[str] = None
    size: Optional[int] = None
    originalName: Optional[str] = None
    createdAt: str
    updatedAt: str

    @classmethod
    def from_domain(cls, record: VideoRecord) -> "VideoRecordPayload":
        return cls(
            id=record.video_id,
            key=record.key,
            location=record.location,
            contentType=record.content_type,
            size=record.size,
            originalName=record.original_name,
            createdAt=_isoformat(record.created_at),
            updatedAt=_isoformat(record.updated_at),
        )


class VideoListResponse(BaseModel):
    success: bool = True
    message: str
    data: List[VideoRecordPayload]


def create_video_router(
    stream_video_use_case: StreamVideoUseCase,
    list_videos_use_case: ListVideosUseCase,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> APIRouter:
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")
    router = APIRouter(tags=["videos"])

    @router.get("/", response_class=PlainTextResponse)
    async def health():
        return "Server is up and running!"

    @router.get("/stream/{video_id}")
    async def stream_video_endpoint(
        video_id: str,
        range_header: Optional[str] = Header(default=None, alias="Range"),
    ):
        """Serve one bounded window of a stored video as 206 Partial Content."""
        command = StreamVideoCommand(video_id=video_id, range_header=range_header)
        streamed = await asyncio.to_thread(stream_video_use_case.execute, command)
        return StreamingResponse(
            iter_body(streamed.body, chunk_size),
            status_code=206,
            headers=streamed.headers,
        )

    @router.get("/get-all-videos", response_model=VideoListResponse)
    async def list_videos_endpoint(name: Optional[str] = None):
        records = await asyncio.to_thread(list_videos_use_case.execute, name)
        return VideoListResponse(
            message="All Data Fetched Successfully",
            data=[VideoRecordPayload.from_domain(record) for record in records],
        )

    return router
