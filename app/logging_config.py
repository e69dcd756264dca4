from __future__ import annotations

import logging

AUDIT_LOGGER_NAME = "app.audit"


def configure_app_logging(level: str = "INFO") -> None:
    """
    Minimal logging configuration for this repo.

    Notes:
    - Stdlib logging only; Uvicorn already configures handlers.
    - `APP_LOG_LEVEL=DEBUG` shows every authorization branch taken.
    - Breach notifications go to `app.audit` and are kept at WARNING or above
      so they survive a quieter application level.
    """

    normalized = level.upper()
    logging.getLogger("app").setLevel(normalized)
    logging.getLogger("app").propagate = True

    audit = logging.getLogger(AUDIT_LOGGER_NAME)
    if audit.getEffectiveLevel() > logging.WARNING:
        audit.setLevel(logging.WARNING)
