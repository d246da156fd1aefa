"""
Flask application creation and route definitions.
"""

import json
import os
from queue import Empty
from typing import Any

from flask import Flask, Response, jsonify, make_response, render_template, request

from .constants import (HTTP_ACCEPTED, HTTP_BAD_REQUEST, HTTP_CONFLICT,
                        HTTP_INTERNAL_SERVER_ERROR, MAX_SYMBOLS_PER_REQUEST,
                        REFRESH_INTERVAL, SSE_KEEPALIVE_INTERVAL)
from .fetchers import request_refresh
from .formatting import register_filters
from .logging_config import logger
from .services import (_build_status_response, quote_service, snapshot_store,
                       sse_manager)
from .sse import format_sse
from .utils import is_valid_symbol, parse_symbols_param

# --------------------------
# FLASK APP FACTORY
# --------------------------

def _create_flask_app(name: str) -> Flask:
    """Create and configure the dashboard Flask application."""
    app = Flask(name)
    base_dir = os.path.dirname(__file__)
    app.template_folder = os.path.join(base_dir, "templates")
    app.static_folder = os.path.join(base_dir, "static")
    app.json.sort_keys = False
    register_filters(app)
    return app


app_ui = _create_flask_app("ui_server")


# --------------------------
# HELPERS
# --------------------------

def _json_response_no_cache(data: Any, status: int = 200) -> Response:
    """Create a JSON response with no-cache headers."""
    response = make_response(jsonify(data), status)
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    return response


def _error_response(message: str, status: int) -> Response:
    return _json_response_no_cache({"error": message}, status)


# --------------------------
# API ROUTES
# --------------------------

@app_ui.route("/api/stocks", methods=["GET"])
def stocks():
    """Return quotes for the comma-separated ``symbols`` query parameter."""
    symbols = parse_symbols_param(request.args.get("symbols"))

    if not symbols:
        return _error_response("No symbols provided", HTTP_BAD_REQUEST)
    if len(symbols) > MAX_SYMBOLS_PER_REQUEST:
        return _error_response(
            f"Too many symbols (max {MAX_SYMBOLS_PER_REQUEST})", HTTP_BAD_REQUEST
        )
    invalid = [symbol for symbol in symbols if not is_valid_symbol(symbol)]
    if invalid:
        return _error_response(f"Invalid symbol(s): {', '.join(invalid)}", HTTP_BAD_REQUEST)

    try:
        quotes = quote_service.get_quotes(symbols)
    except Exception as e:
        logger.exception("API error fetching %s: %s", symbols, e)
        return _error_response("Failed to fetch stock data", HTTP_INTERNAL_SERVER_ERROR)

    return _json_response_no_cache({"data": [quote.to_dict() for quote in quotes]})


@app_ui.route("/api/portfolio", methods=["GET"])
def portfolio_data():
    """Return the latest portfolio snapshot as JSON."""
    return _json_response_no_cache(snapshot_store.get().to_dict())


@app_ui.route("/status", methods=["GET"])
def status():
    """Return current refresh state."""
    return _json_response_no_cache(_build_status_response())


@app_ui.route("/events", methods=["GET"])
def events():
    """Server-Sent Events endpoint pushing portfolio and status updates."""
    def event_stream():
        client_queue = sse_manager.new_client()
        try:
            yield format_sse(json.dumps(_build_status_response()), "status")
            while True:
                try:
                    yield client_queue.get(timeout=SSE_KEEPALIVE_INTERVAL)
                except Empty:
                    yield ": keepalive\n\n"
        finally:
            sse_manager.remove_client(client_queue)

    return Response(event_stream(), mimetype='text/event-stream', headers={
        'Cache-Control': 'no-cache',
        'X-Accel-Buffering': 'no',
        'Connection': 'keep-alive',
    })


@app_ui.route("/refresh", methods=["POST"])
def refresh_route():
    """Trigger an immediate portfolio refresh."""
    if not request_refresh():
        return _error_response("Refresh already in progress", HTTP_CONFLICT)
    return _json_response_no_cache({"status": "started"}, HTTP_ACCEPTED)


# --------------------------
# PAGES
# --------------------------

@app_ui.route("/portfolio_table", methods=["GET"])
def portfolio_table():
    """Render the summary header and sector tables as an HTML fragment."""
    return render_template("_portfolio.html", snapshot=snapshot_store.get())


@app_ui.route("/", methods=["GET"])
def dashboard_page():
    """Serve the dashboard page."""
    return render_template(
        "dashboard.html",
        snapshot=snapshot_store.get(),
        refresh_interval=REFRESH_INTERVAL,
    )
