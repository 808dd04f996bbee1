from __future__ import annotations

import logging

from services.video_gateway.application.dto import CompleteUploadCommand
from services.video_gateway.application.interfaces import (
    ObjectStoreClient,
    VideoCatalog,
    VideoEventPublisher,
)
from services.video_gateway.domain.errors import (
    PersistenceError,
    UpstreamError,
    ValidationError,
)
from services.video_gateway.domain.upload import CompletedUpload

LOGGER = logging.getLogger(__name__)


class CompleteUploadUseCase:
    def __init__(
        self,
        *,
        object_store: ObjectStoreClient,
        catalog: VideoCatalog,
        event_publisher: VideoEventPublisher | None = None,
    ) -> None:
        self._object_store = object_store
        self._catalog = catalog
        self._event_publisher = event_publisher

    def execute(self, command: CompleteUploadCommand) -> CompletedUpload:
        if not command.parts:
            raise ValidationError("At least one part is required to complete an upload")

        # The backend is the authority on whether the part set is complete;
        # it only insists on ascending part numbers.
        ordered_parts = sorted(
            ((part.part_number, part.etag) for part in command.parts),
            key=lambda part: part[0],
        )

        try:
            location = self._object_store.complete_multipart_upload(
                object_key=command.object_key,
                upload_id=command.upload_id,
                parts=ordered_parts,
            )
        except UpstreamError:
            LOGGER.error(
                "Failed to complete multipart upload %s for %s",
                command.upload_id,
                command.object_key,
            )
            raise

        try:
            record = self._catalog.create(
                key=command.object_key,
                location=location,
                original_name=command.display_name,
            )
        except PersistenceError:
            LOGGER.error(
                "Object %s is stored at %s but has no catalog record",
                command.object_key,
                location,
            )
            raise

        LOGGER.info(
            "Completed upload of %s as video %s (%s)",
            record.key,
            record.video_id,
            location,
        )
        if self._event_publisher is not None:
            self._event_publisher.publish_video_uploaded(record)

        return CompletedUpload(
            video_id=record.video_id,
            upload_id=command.upload_id,
            object_key=command.object_key,
            location=location,
        )
