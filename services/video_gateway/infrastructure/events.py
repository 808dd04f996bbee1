from __future__ import annotations

import json
import logging
from typing import Any

from redis import Redis
from redis.exceptions import RedisError

from services.video_gateway.application.interfaces import VideoEventPublisher
from services.video_gateway.config import GatewayConfig
from services.video_gateway.domain.video import VideoRecord

LOGGER = logging.getLogger(__name__)


def _uploaded_payload(record: VideoRecord) -> dict[str, Any]:
    return {
        "event": "video.uploaded",
        "video_id": record.video_id,
        "key": record.key,
        "location": record.location,
        "original_name": record.original_name,
    }


class LoggingVideoEventPublisher(VideoEventPublisher):
    def publish_video_uploaded(self, record: VideoRecord) -> None:
        LOGGER.info(_uploaded_payload(record))


class RedisVideoEventPublisher(VideoEventPublisher):
    def __init__(self, client: Redis, *, channel: str) -> None:
        self._redis = client
        self._channel = channel

    def publish_video_uploaded(self, record: VideoRecord) -> None:
        try:
            self._redis.publish(self._channel, json.dumps(_uploaded_payload(record)))
        except RedisError as exc:
            LOGGER.error(
                "Failed to publish upload event for video %s: %s",
                record.video_id,
                exc,
            )


def create_event_publisher(config: GatewayConfig) -> VideoEventPublisher:
    if not config.redis_host:
        return LoggingVideoEventPublisher()
    client = Redis(
        host=config.redis_host,
        port=config.redis_port,
        db=config.redis_db,
        decode_responses=False,
    )
    return RedisVideoEventPublisher(client, channel=config.redis_channel)
