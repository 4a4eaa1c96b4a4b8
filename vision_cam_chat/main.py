"""Entry point — wires Config → ImageSession → FastAPI app → uvicorn."""
import logging

import uvicorn
from rich.logging import RichHandler

from vision_cam_chat.api import create_app
from vision_cam_chat.config import Config
from vision_cam_chat.constants import MSG_ENDPOINT, MSG_SERVER_STARTING
from vision_cam_chat.session import ImageSession

ENDPOINTS = (
    ("GET", "/health"),
    ("GET", "/providers"),
    ("GET", "/bedrock/status"),
    ("GET", "/openai/status"),
    ("POST", "/analyze"),
    ("POST", "/ask"),
    ("DELETE", "/session"),
)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_SERVER_STARTING, config.host, config.port)
    list(map(logger.info, config.summary().splitlines()))
    list(map(lambda e: logger.info(MSG_ENDPOINT, *e), ENDPOINTS))

    app = create_app(config, session=ImageSession())
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
