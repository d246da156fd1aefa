#!/usr/bin/env python3
"""
Portfolio Dashboard Server: application entry point.

Usage:
    1. Install: pip install -e .
    2. Optionally adjust config/config.json
    3. Run: python -m dashboard   (or the portfolio-dashboard script)
"""

import threading
import time
import webbrowser

from flask import Flask

from .config import app_config
from .constants import BROWSER_OPEN_DELAY, SERVER_STARTUP_DELAY
from .fetchers import refresh_scheduler
from .logging_config import configure, logger
from .routes import app_ui

# --------------------------
# SERVER MANAGEMENT
# --------------------------

def start_server(app: Flask, host: str, port: int) -> threading.Thread:
    """Start a Flask application in a background daemon thread.

    Args:
        app: Flask application instance.
        host: Host address to bind to.
        port: Port number to bind to.

    Returns:
        Thread running the Flask server.
    """
    def _run_server():
        app.run(host=host, port=port, debug=False, use_reloader=False, threaded=True)

    thread = threading.Thread(target=_run_server, name="UIServer", daemon=True)
    thread.start()
    time.sleep(SERVER_STARTUP_DELAY)  # Allow server to start
    return thread


def main() -> None:
    """Initialize and start the Portfolio Dashboard.

    1. Configures logging.
    2. Starts the UI Flask server.
    3. Starts the quote refresh scheduler (first refresh runs immediately).
    4. Opens the dashboard in a web browser if configured.
    5. Keeps the application running until interrupted.
    """
    configure()
    logger.info("Starting Portfolio Dashboard...")

    try:
        dashboard_url = app_config.dashboard_url
        logger.info("Starting UI server at %s", dashboard_url)
        start_server(app_ui, app_config.ui_host, app_config.ui_port)

        refresh_scheduler.start()
        logger.info("Server ready. Press CTRL+C to stop.")

        if app_config.open_browser:
            logger.info("Opening dashboard in browser...")
            threading.Timer(BROWSER_OPEN_DELAY, lambda: webbrowser.open(dashboard_url)).start()

        while True:
            time.sleep(1)

    except KeyboardInterrupt:
        logger.info("Shutting down gracefully...")
    except Exception as e:
        logger.exception("Fatal error occurred: %s", e)
    finally:
        refresh_scheduler.stop(timeout=5)


if __name__ == "__main__":
    main()
