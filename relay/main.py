"""Process entrypoint: ``python -m relay.main``."""
import uvicorn

from .config import HOST, LOG_FILE, LOG_LEVEL, PORT
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
    logger.info(f"Starting relay on {HOST}:{PORT}")
    uvicorn.run("relay.app:app", host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
