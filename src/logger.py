import logging

from src.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_LOGS else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("social")
