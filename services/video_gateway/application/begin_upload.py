from __future__ import annotations

import logging

from services.video_gateway.application.dto import BeginUploadCommand
from services.video_gateway.application.interfaces import ObjectStoreClient
from services.video_gateway.domain.errors import UpstreamError, ValidationError
from services.video_gateway.domain.stream import DEFAULT_OCTET_STREAM
from services.video_gateway.domain.upload import UploadSession

LOGGER = logging.getLogger(__name__)


class BeginUploadUseCase:
    def __init__(self, object_store: ObjectStoreClient) -> None:
        self._object_store = object_store

    def execute(self, command: BeginUploadCommand) -> UploadSession:
        if not command.file_name or not command.file_name.strip():
            raise ValidationError("fileName is required")

        # The client-supplied name is the storage key; uniqueness is the caller's.
        object_key = command.file_name
        content_type = command.file_type or DEFAULT_OCTET_STREAM
        try:
            upload_id = self._object_store.create_multipart_upload(
                object_key=object_key, content_type=content_type
            )
        except UpstreamError:
            LOGGER.error("Failed to start multipart upload for %s", object_key)
            raise

        LOGGER.info("Started multipart upload %s for %s", upload_id, object_key)
        return UploadSession(upload_id=upload_id, object_key=object_key)
