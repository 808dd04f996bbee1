from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.video_gateway.api.errors import register_exception_handlers
from services.video_gateway.api.routes import create_router
from services.video_gateway.api.video_routes import create_video_router
from services.video_gateway.application.abort_upload import AbortUploadUseCase
from services.video_gateway.application.begin_upload import BeginUploadUseCase
from services.video_gateway.application.complete_upload import CompleteUploadUseCase
from services.video_gateway.application.interfaces import (
    ObjectStoreClient,
    VideoCatalog,
    VideoEventPublisher,
)
from services.video_gateway.application.list_videos import ListVideosUseCase
from services.video_gateway.application.stream_video import StreamVideoUseCase
from services.video_gateway.application.upload_part import UploadPartUseCase
from services.video_gateway.config import GatewayConfig, load_config
from services.video_gateway.infrastructure.catalog import SqlAlchemyVideoCatalog
from services.video_gateway.infrastructure.db import create_session_factory
from services.video_gateway.infrastructure.events import create_event_publisher
from services.video_gateway.infrastructure.ids import TokenIdProvider
from services.video_gateway.infrastructure.s3_object_store import create_object_store


def build_app(
    config: GatewayConfig | None = None,
    *,
    object_store: ObjectStoreClient | None = None,
    catalog: VideoCatalog | None = None,
    event_publisher: VideoEventPublisher | None = None,
) -> FastAPI:
    cfg = config or load_config()
    app = FastAPI(title="video-gateway")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
    )
    register_exception_handlers(app)

    if object_store is None:
        object_store = create_object_store(cfg)
    if catalog is None:
        video_id_provider = TokenIdProvider(prefix="vid", length=cfg.video_id_length)
        catalog = SqlAlchemyVideoCatalog(
            session_factory=create_session_factory(cfg.sqlalchemy_dsn),
            id_provider=video_id_provider,
        )
    if event_publisher is None:
        event_publisher = create_event_publisher(cfg)

    begin_upload_use_case = BeginUploadUseCase(object_store)
    upload_part_use_case = UploadPartUseCase(object_store)
    complete_upload_use_case = CompleteUploadUseCase(
        object_store=object_store,
        catalog=catalog,
        event_publisher=event_publisher,
    )
    abort_upload_use_case = AbortUploadUseCase(object_store)
    stream_video_use_case = StreamVideoUseCase(
        catalog=catalog,
        object_store=object_store,
        window_size=cfg.stream_window_bytes,
    )
    list_videos_use_case = ListVideosUseCase(catalog)

    app.include_router(
        create_router(
            begin_upload_use_case,
            upload_part_use_case,
            complete_upload_use_case,
            abort_upload_use_case,
        )
    )
    app.include_router(
        create_video_router(
            stream_video_use_case,
            list_videos_use_case,
            chunk_size=cfg.stream_chunk_bytes,
        )
    )

    return app
