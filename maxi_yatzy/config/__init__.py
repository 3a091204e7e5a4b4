"""
Maxi Yatzy Configuration.

Environment variables, settings, and logging configuration.
"""

from maxi_yatzy.config.logging_config import configure_logging
from maxi_yatzy.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
