"""
Spa Booking API Runner
Run this as: python run_server.py
"""

import logging
import sys

import uvicorn

from spa_booking.config import SERVER_PORT

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info(f"🚀 Starting Spa Booking API on port {SERVER_PORT}...")
    try:
        uvicorn.run("spa_booking.main:app", host="0.0.0.0", port=SERVER_PORT)
    except KeyboardInterrupt:
        logger.info("👋 Server stopped by user")
