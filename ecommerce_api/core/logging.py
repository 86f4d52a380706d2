# ===================================
# ecommerce_api/core/logging.py
# ===================================
import logging

from ecommerce_api.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """Configurer le logger racine selon les settings"""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
