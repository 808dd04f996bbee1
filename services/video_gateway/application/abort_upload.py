from __future__ import annotations

import logging

from services.video_gateway.application.dto import AbortUploadCommand
from services.video_gateway.application.interfaces import ObjectStoreClient
from services.video_gateway.domain.errors import UpstreamError, ValidationError

LOGGER = logging.getLogger(__name__)


class AbortUploadUseCase:
    def __init__(self, object_store: ObjectStoreClient) -> None:
        self._object_store = object_store

    def execute(self, command: AbortUploadCommand) -> None:
        if not command.upload_id or not command.object_key:
            raise ValidationError("uploadId and fileKey are required")
        try:
            self._object_store.abort_multipart_upload(
                object_key=command.object_key, upload_id=command.upload_id
            )
        except UpstreamError:
            LOGGER.error(
                "Failed to abort multipart upload %s for %s",
                command.upload_id,
                command.object_key,
            )
            raise
        LOGGER.info("Aborted multipart upload %s for %s", command.upload_id, command.object_key)
