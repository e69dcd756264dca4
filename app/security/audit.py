from __future__ import annotations

import logging

from app.logging_config import AUDIT_LOGGER_NAME

audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)


class LoggingBreachSink:
    """
    Breach sink that writes one WARNING record per denied permission check.

    Persisting or forwarding those records is left to the logging handlers.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or audit_logger

    def notify_authorization_breach(self) -> None:
        self._logger.warning("Authorization breach: caller attempted to access data without permission")
