"""HTTP server exposing the latest quote at GET /cotacao.

Each request opens its own database connection, fetches a fresh quote,
stores it and returns it. Nothing is shared between requests except the
database file.
"""

import logging

from flask import Flask, Response, jsonify

from cotacao.config import ServerConfig
from cotacao.database import create_service
from cotacao.errors import FetchFailure, PersistenceFailure, StorageUnavailable
from cotacao.quotes import AwesomeAPIFetcher, QuoteFetcher, ensure_quote_schema, insert_quote

logger = logging.getLogger(__name__)


def _plain_error(message: str, status: int = 500) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def bootstrap(config: ServerConfig) -> None:
    """Create the quote table. Raises StorageUnavailable or SchemaFailure."""
    service = create_service(config.database_url)
    service.connect()
    try:
        ensure_quote_schema(service)
    finally:
        service.close()


def create_app(config: ServerConfig, fetcher: QuoteFetcher | None = None) -> Flask:
    """Build the Flask app. `fetcher` defaults to the live AwesomeAPI client."""
    if fetcher is None:
        fetcher = AwesomeAPIFetcher(
            config.api_base_url, config.currency_pair, config.http_timeout
        )

    app = Flask(__name__)

    @app.route("/cotacao", methods=["GET"])
    def get_cotacao():
        service = create_service(config.database_url)
        try:
            service.connect()
        except StorageUnavailable as e:
            logger.error("Database connection error: %s", e)
            return _plain_error("database connection error")

        try:
            try:
                bid = fetcher.fetch_quote()
            except FetchFailure as e:
                logger.error("Fetch error: %s", e)
                return _plain_error(f"fetch error: {e}")

            try:
                insert_quote(service, bid, deadline=config.db_timeout)
            except PersistenceFailure as e:
                logger.error("Persistence error: %s", e)
                return _plain_error(f"persistence error: {e}")
        finally:
            service.close()

        return jsonify({"bid": bid})

    return app
