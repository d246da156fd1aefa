import logging
from typing import Optional

# Shared logger for the project. Modules import this `logger` instead of
# defining `logging.getLogger(__name__)` in every file, so handlers and
# formatters apply consistently across modules.

logger = logging.getLogger("portfolio_dashboard")


def configure(level: int = logging.INFO, fmt: Optional[str] = None) -> None:
    """Configure root logging for the application.

    Call this once from the entry point (``server.main()``).
    """
    if fmt is None:
        # 2025-11-29 20:34:42,819 INFO portfolio_dashboard: message
        fmt = "%(asctime)s,%(msecs)03d %(levelname)s %(name)s: %(message)s"
    logging.basicConfig(level=level, format=fmt, datefmt="%Y-%m-%d %H:%M:%S")
    logger.setLevel(level)
    # Werkzeug logs every HTTP request at INFO; the dashboard polls often.
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
