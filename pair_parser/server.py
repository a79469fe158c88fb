"""
HTTP Microservice
=================
Flask-based HTTP API for the pair parser engine.

The chat UI posts an AI response here after the chat transport has
delivered it, and renders the returned pairs as "Try This" buttons.

Endpoints:
    POST   /api/pairs      → Extract pairs, display titles and statistics
    POST   /api/stats      → Marker statistics only
    POST   /api/segments   → Ordered display segments
    GET    /api/health     → Health check
    GET    /api/info       → Parser version info
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from . import __version__
from .engine import ExtractorConfig, PairEngine
from .models import BlockKind

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)


def create_app(config: Optional[dict] = None) -> Flask:
    """Create and configure the Flask app."""
    if config:
        app.config.update(config)

    app.config.setdefault("MAX_CONTENT_LENGTH", 2 * 1024 * 1024)  # 2MB
    app.config.setdefault("EXTRACTOR_CONFIG", ExtractorConfig())

    return app


def _engine() -> PairEngine:
    return PairEngine(app.config.get("EXTRACTOR_CONFIG") or ExtractorConfig())


def _request_payload():
    """Parse the JSON body once; build a 400 unless it carries string 'text'."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get("text"), str):
        return None, (jsonify({"error": "Request body must contain 'text'"}), 400)
    return data, None


# ─── Health Check ─────────────────────────────────────────────────────────────


@app.route("/api/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "ok",
        "service": "pair-parser",
        "version": __version__,
    })


@app.route("/api/info", methods=["GET"])
def info():
    """Parser version and configuration info."""
    config = app.config.get("EXTRACTOR_CONFIG") or ExtractorConfig()
    return jsonify({
        "parser_version": __version__,
        "markers": [kind.marker for kind in BlockKind],
        "thresholds": asdict(config.thresholds),
        "title_max_length": config.title_max_length,
    })


# ─── Extraction ───────────────────────────────────────────────────────────────


@app.route("/api/pairs", methods=["POST"])
def extract_pairs():
    """
    Extract expression pairs from a response.

    Body: {"text": "...", "sessionId": "..."}
    """
    data, error = _request_payload()
    if error:
        return error

    source = str(data.get("sessionId") or "")
    report = _engine().analyze(data["text"], source=source)
    return jsonify(report.model_dump(mode="json"))


@app.route("/api/stats", methods=["POST"])
def marker_stats():
    data, error = _request_payload()
    if error:
        return error

    return jsonify(_engine().statistics(data["text"]).model_dump(mode="json"))


@app.route("/api/segments", methods=["POST"])
def content_segments():
    data, error = _request_payload()
    if error:
        return error

    segments = _engine().segments(data["text"])
    return jsonify({
        "segments": [s.model_dump(mode="json") for s in segments],
    })


def run_server(host: str = "0.0.0.0", port: int = 5000, debug: bool = False):
    """Run the Flask development server."""
    create_app()
    logger.info(f"Starting pair parser service on {host}:{port}")
    app.run(host=host, port=port, debug=debug)
