from __future__ import annotations

import asyncio
from typing import List, Optional

from fastapi import APIRouter, File, Form, UploadFile
from pydantic import BaseModel, Field

from services.video_gateway.application.abort_upload import AbortUploadUseCase
from services.video_gateway.application.begin_upload import BeginUploadUseCase
from services.video_gateway.application.complete_upload import CompleteUploadUseCase
from services.video_gateway.application.dto import (
    AbortUploadCommand,
    BeginUploadCommand,
    CompleteUploadCommand,
    CompletionPart,
    UploadPartCommand,
)
from services.video_gateway.application.upload_part import UploadPartUseCase
from services.video_gateway.domain.upload import (
    CompletedUpload,
    UploadedPart,
    UploadSession,
)


class StartUploadRequest(BaseModel):
    fileName: str
    fileType: str = ""


class StartUploadResponse(BaseModel):
    success: bool = True
    uploadId: str
    fileKey: str

    @classmethod
    def from_domain(cls, session: UploadSession) -> "StartUploadResponse":
        return cls(uploadId=session.upload_id, fileKey=session.object_key)


class UploadChunkResponse(BaseModel):
    success: bool = True
    ETag: str

    @classmethod
    def from_domain(cls, part: UploadedPart) -> "UploadChunkResponse":
        return cls(ETag=part.etag)


class CompletionPartPayload(BaseModel):
    PartNumber: int = Field(ge=1)
    ETag: str


class CompleteUploadRequest(BaseModel):
    uploadId: str
    fileKey: str
    parts: List[CompletionPartPayload]
    fileName: Optional[str] = None


class CompleteUploadResponse(BaseModel):
    success: bool = True
    location: str
    videoId: str

    @classmethod
    def from_domain(cls, completed: CompletedUpload) -> "CompleteUploadResponse":
        return cls(location=completed.location, videoId=completed.video_id)


class AbortUploadRequest(BaseModel):
    uploadId: str
    fileKey: str


def create_router(
    begin_upload_use_case: BeginUploadUseCase,
    upload_part_use_case: UploadPartUseCase,
    complete_upload_use_case: CompleteUploadUseCase,
    abort_upload_use_case: AbortUploadUseCase,
) -> APIRouter:
    router = APIRouter(tags=["uploads"])

    @router.post("/start-upload", response_model=StartUploadResponse)
    async def start_upload_endpoint(payload: StartUploadRequest):
        command = BeginUploadCommand(
            file_name=payload.fileName, file_type=payload.fileType
        )
        session = await asyncio.to_thread(begin_upload_use_case.execute, command)
        return StartUploadResponse.from_domain(session)

    @router.post("/upload-chunk", response_model=UploadChunkResponse)
    async def upload_chunk_endpoint(
        uploadId: str = Form(...),
        fileKey: str = Form(...),
        chunkIndex: int = Form(...),
        chunk: Optional[UploadFile] = File(None),
    ):
        # A missing file part is treated like an empty one: the client failed to read it.
        payload = await chunk.read() if chunk is not None else b""
        command = UploadPartCommand(
            upload_id=uploadId,
            object_key=fileKey,
            part_index=chunkIndex,
            payload=payload,
        )
        part = await asyncio.to_thread(upload_part_use_case.execute, command)
        return UploadChunkResponse.from_domain(part)

    @router.post("/complete-upload", response_model=CompleteUploadResponse)
    async def complete_upload_endpoint(payload: CompleteUploadRequest):
        command = CompleteUploadCommand(
            upload_id=payload.uploadId,
            object_key=payload.fileKey,
            parts=[
                CompletionPart(part_number=part.PartNumber, etag=part.ETag)
                for part in payload.parts
            ],
            display_name=payload.fileName,
        )
        completed = await asyncio.to_thread(complete_upload_use_case.execute, command)
        return CompleteUploadResponse.from_domain(completed)

    @router.post("/abort-upload")
    async def abort_upload_endpoint(payload: AbortUploadRequest):
        command = AbortUploadCommand(
            upload_id=payload.uploadId, object_key=payload.fileKey
        )
        await asyncio.to_thread(abort_upload_use_case.execute, command)
        return {"success": True}

    return router
