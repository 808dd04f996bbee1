from __future__ import annotations

import logging

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from services.video_gateway.application.interfaces import ObjectBody, ObjectStoreClient
from services.video_gateway.config import GatewayConfig
from services.video_gateway.domain.errors import NotFoundError, UpstreamError
from services.video_gateway.domain.video import ObjectMetadata

LOGGER = logging.getLogger(__name__)

_MISSING_OBJECT_CODES = {"404", "NoSuchKey", "NotFound"}


def create_s3_client(config: GatewayConfig):
    return boto3.client(
        "s3",
        endpoint_url=config.storage_endpoint_url,
        region_name=config.storage_region,
        aws_access_key_id=config.storage_access_key,
        aws_secret_access_key=config.storage_secret_key,
        config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


class S3ObjectStoreClient(ObjectStoreClient):
    def __init__(self, client, *, bucket_name: str) -> None:
        self._client = client
        self._bucket_name = bucket_name

    def create_multipart_upload(self, object_key: str, content_type: str) -> str:
        try:
            response = self._client.create_multipart_upload(
                Bucket=self._bucket_name,
                Key=object_key,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise _upstream("Failed to start upload", exc) from exc
        return response["UploadId"]

    def upload_part(
        self, *, object_key: str, upload_id: str, part_number: int, body: bytes
    ) -> str:
        try:
            response = self._client.upload_part(
                Bucket=self._bucket_name,
                Key=object_key,
                UploadId=upload_id,
                PartNumber=part_number,
                Body=body,
            )
        except (BotoCoreError, ClientError) as exc:
            raise _upstream("Failed to upload chunk", exc) from exc
        return response["ETag"]

    def complete_multipart_upload(
        self, *, object_key: str, upload_id: str, parts: list[tuple[int, str]]
    ) -> str:
        try:
            response = self._client.complete_multipart_upload(
                Bucket=self._bucket_name,
                Key=object_key,
                UploadId=upload_id,
                MultipartUpload={
                    "Parts": [
                        {"ETag": etag, "PartNumber": part_no} for part_no, etag in parts
                    ]
                },
            )
        except (BotoCoreError, ClientError) as exc:
            raise _upstream("Failed to complete upload", exc) from exc
        return response.get("Location") or f"s3://{self._bucket_name}/{object_key}"

    def abort_multipart_upload(self, *, object_key: str, upload_id: str) -> None:
        try:
            self._client.abort_multipart_upload(
                Bucket=self._bucket_name,
                Key=object_key,
                UploadId=upload_id,
            )
        except (BotoCoreError, ClientError) as exc:
            raise _upstream("Failed to abort upload", exc) from exc

    def head_object(self, object_key: str) -> ObjectMetadata:
        try:
            response = self._client.head_object(
                Bucket=self._bucket_name, Key=object_key
            )
        except ClientError as exc:
            if _error_code(exc) in _MISSING_OBJECT_CODES:
                raise NotFoundError("Video not found") from exc
            raise _upstream("Failed to stream video", exc) from exc
        except BotoCoreError as exc:
            raise _upstream("Failed to stream video", exc) from exc
        return ObjectMetadata(
            size=int(response["ContentLength"]),
            content_type=response.get("ContentType"),
        )

    def get_object_range(self, *, object_key: str, start: int, end: int) -> ObjectBody:
        try:
            response = self._client.get_object(
                Bucket=self._bucket_name,
                Key=object_key,
                Range=f"bytes={start}-{end}",
            )
        except (BotoCoreError, ClientError) as exc:
            raise _upstream("Failed to stream video", exc) from exc
        return response["Body"]


def create_object_store(config: GatewayConfig) -> S3ObjectStoreClient:
    return S3ObjectStoreClient(
        create_s3_client(config), bucket_name=config.storage_bucket
    )


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def _upstream(message: str, exc: Exception) -> UpstreamError:
    LOGGER.error("%s: %s", message, exc)
    return UpstreamError(message)
