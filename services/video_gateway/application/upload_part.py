from __future__ import annotations

import logging

from services.video_gateway.application.dto import UploadPartCommand
from services.video_gateway.application.interfaces import ObjectStoreClient
from services.video_gateway.domain.errors import UpstreamError, ValidationError
from services.video_gateway.domain.upload import MAX_PART_NUMBER, UploadedPart

LOGGER = logging.getLogger(__name__)


class UploadPartUseCase:
    """Pushes one chunk of an open multipart upload to the object store.

    Chunk indices are zero-based on the wire and become 1-based part numbers
    here. Parts may arrive in any order and concurrently; a re-sent part
    number overwrites the earlier one on the backend. Nothing is retried.
    """

    def __init__(self, object_store: ObjectStoreClient) -> None:
        self._object_store = object_store

    def execute(self, command: UploadPartCommand) -> UploadedPart:
        if not command.payload:
            raise ValidationError("Empty chunk received")
        if not command.upload_id or not command.object_key:
            raise ValidationError("uploadId and fileKey are required")
        if command.part_index < 0:
            raise ValidationError("chunkIndex must be zero or greater")

        part_number = command.part_index + 1
        if part_number > MAX_PART_NUMBER:
            raise ValidationError(
                "chunkIndex must be below %d" % MAX_PART_NUMBER
            )

        try:
            etag = self._object_store.upload_part(
                object_key=command.object_key,
                upload_id=command.upload_id,
                part_number=part_number,
                body=command.payload,
            )
        except UpstreamError:
            LOGGER.error(
                "Failed to upload part %s of %s (%s)",
                part_number,
                command.object_key,
                command.upload_id,
            )
            raise

        LOGGER.info(
            "Accepted part %s of %s (%d bytes)",
            part_number,
            command.object_key,
            len(command.payload),
        )
        return UploadedPart(part_number=part_number, etag=etag)
