import uvicorn
from logging_config import setup_logging
from constants import HOST, LOG_FILE, LOG_LEVEL, PORT

# Setup logging before importing app
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)

from app import app
from logging_config import get_logger

logger = get_logger(__name__)

if __name__ == "__main__":
    logger.info(f"Starting rendezvous relay on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
