import uvicorn

from services.video_gateway.config import load_config
from services.video_gateway.logging_config import setup_logging
from services.video_gateway.main import build_app


def main() -> None:
    cfg = load_config()
    setup_logging(cfg.log_level)
    uvicorn.run(build_app(cfg), host=cfg.host, port=cfg.port, log_config=None)


if __name__ == "__main__":
    main()
