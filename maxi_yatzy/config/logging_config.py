"""
Maxi Yatzy - Logging Configuration
"""

import logging

from maxi_yatzy.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured level and format to the ``maxi_yatzy`` loggers."""
    if settings is None:
        settings = get_settings()
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("maxi_yatzy").setLevel(settings.effective_log_level)
