"""Logging setup for applications embedding the keyring."""

import logging
from typing import Optional

from jupwallet.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> int:
    """Configure root logging from settings.

    Library modules only create loggers; call this once from the embedding
    application if it does not configure logging itself.

    Returns:
        The log level that was applied
    """
    settings = settings or get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger("jupwallet").setLevel(log_level)
    return log_level
