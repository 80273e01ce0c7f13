"""CLI entry point for the quote server.

Usage:
    python -m scripts.serve [--db-url sqlite:///database.db] [--port 8080] [--mock]
"""

import argparse
import logging
import sys

from cotacao.config import ServerConfig
from cotacao.errors import CotacaoError
from cotacao.quotes import MockQuoteFetcher
from cotacao.server import bootstrap, create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULTS = ServerConfig()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the latest USD-BRL quote")
    parser.add_argument("--db-url", default=DEFAULTS.database_url, help="Database URL")
    parser.add_argument("--api-url", default=DEFAULTS.api_base_url, help="Exchange API base URL")
    parser.add_argument("--pair", default=DEFAULTS.currency_pair, help="Currency pair, e.g. USD-BRL")
    parser.add_argument(
        "--http-timeout", type=float, default=DEFAULTS.http_timeout, help="Upstream timeout (s)"
    )
    parser.add_argument(
        "--db-timeout", type=float, default=DEFAULTS.db_timeout, help="Insert deadline (s)"
    )
    parser.add_argument("--host", default=DEFAULTS.host, help="Listen address")
    parser.add_argument("--port", type=int, default=DEFAULTS.port, help="Listen port")
    parser.add_argument("--mock", action="store_true", help="Serve a fixed quote (for testing)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    config = ServerConfig(
        database_url=args.db_url,
        api_base_url=args.api_url,
        currency_pair=args.pair,
        http_timeout=args.http_timeout,
        db_timeout=args.db_timeout,
        host=args.host,
        port=args.port,
    )

    try:
        bootstrap(config)
    except CotacaoError as e:
        logger.error("Cannot prepare database: %s", e)
        sys.exit(1)

    app = create_app(config, MockQuoteFetcher() if args.mock else None)
    logger.info("Listening on %s:%d", config.host, config.port)
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
