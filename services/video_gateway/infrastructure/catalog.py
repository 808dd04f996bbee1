from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.exc import SQLAlchemyError

from services.video_gateway.application.interfaces import IdProvider, VideoCatalog
from services.video_gateway.domain.errors import PersistenceError
from services.video_gateway.domain.video import VideoRecord
from services.video_gateway.infrastructure.db import Base

LOGGER = logging.getLogger(__name__)


class VideoInfoRecord(Base):
    __tablename__ = "video_info"

    video_id = Column(String, primary_key=True)
    key = Column(String, nullable=False)
    location = Column(String, nullable=False)
    content_type = Column(String, nullable=True)
    size = Column(Integer, nullable=True)
    original_name = Column(String, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class SqlAlchemyVideoCatalog(VideoCatalog):
    def __init__(self, session_factory, id_provider: IdProvider) -> None:
        self._session_factory = session_factory
        self._id_provider = id_provider

    def create(
        self,
        *,
        key: str,
        location: str,
        content_type: str | None = None,
        size: int | None = None,
        original_name: str | None = None,
    ) -> VideoRecord:
        now = datetime.now(timezone.utc)
        record = VideoInfoRecord(
            video_id=self._id_provider.generate(),
            key=key,
            location=location,
            content_type=content_type,
            size=size,
            original_name=original_name,
            created_at=now,
            updated_at=now,
        )
        try:
            with self._session_factory() as db:
                db.add(record)
                db.commit()
                return _to_domain(record)
        except SQLAlchemyError as exc:
            LOGGER.error("Failed to save video record for %s: %s", key, exc)
            raise PersistenceError("Failed to save video record") from exc

    def get(self, video_id: str) -> VideoRecord | None:
        try:
            with self._session_factory() as db:
                record = db.get(VideoInfoRecord, video_id)
                if record is None:
                    return None
                return _to_domain(record)
        except SQLAlchemyError as exc:
            LOGGER.error("Failed to load video %s: %s", video_id, exc)
            raise PersistenceError("Failed to load video") from exc

    def list(self, name_filter: str | None = None) -> list[VideoRecord]:
        try:
            with self._session_factory() as db:
                query = db.query(VideoInfoRecord)
                if name_filter:
                    query = query.filter(
                        VideoInfoRecord.original_name.icontains(name_filter, autoescape=True)
                    )
                rows = query.order_by(
                    VideoInfoRecord.created_at.asc(), VideoInfoRecord.video_id.asc()
                ).all()
                return [_to_domain(row) for row in rows]
        except SQLAlchemyError as exc:
            LOGGER.error("Failed to list videos: %s", exc)
            raise PersistenceError("Failed to list videos") from exc


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_domain(record: VideoInfoRecord) -> VideoRecord:
    return VideoRecord(
        video_id=record.video_id,
        key=record.key,
        location=record.location,
        content_type=record.content_type,
        size=record.size,
        original_name=record.original_name,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
    )
