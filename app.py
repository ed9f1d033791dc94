"""
Flask application for the star registry.

Builds the app around a single in-memory Blockchain, registers the star API
and error handling blueprints, and exposes health and Prometheus endpoints.
Run with ``starledger-cli serve`` or ``flask --app app run``.
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, Response, jsonify
from flask_cors import CORS
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from api_utils.error_handler import error_bp
from blueprints.star_api import star_api
from config import Settings, get_package_version
from starledger import Blockchain
from starledger.metrics import start_metrics_server

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, chain: Optional[Blockchain] = None) -> Flask:
    """
    Create the Flask app. A new chain (with its genesis block) is built unless one is given.
    """
    settings = settings or Settings()
    app = Flask(__name__)
    if settings.cors_enabled:
        CORS(app)

    if chain is None:
        chain = Blockchain(submission_window_seconds=settings.submission_window_seconds)
    app.extensions["starledger"] = chain
    app.config["STARLEDGER_SETTINGS"] = settings

    @app.route("/health", methods=["GET"])
    def health() -> Response:
        """Application health endpoint."""
        return jsonify({"status": "ok", "version": get_package_version()})

    @app.route("/metrics", methods=["GET"])
    def metrics_endpoint() -> Response:
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    app.register_blueprint(error_bp)
    app.register_blueprint(star_api)
    logger.info(f"Star registry app created at chain height {chain.get_chain_height()}")
    return app


def main(host: Optional[str] = None, port: Optional[int] = None) -> None:
    load_dotenv()
    settings = Settings()
    logging.basicConfig(level=settings.log_level)
    if settings.start_metrics_server:
        start_metrics_server(port=settings.metrics_port, addr=settings.metrics_addr)
        logger.info(f"Metrics server listening on {settings.metrics_addr}:{settings.metrics_port}")
    app = create_app(settings)
    app.run(host=host or settings.host, port=port or settings.port)


if __name__ == "__main__":
    main()
