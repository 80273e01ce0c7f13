"""CLI entry point for the quote client.

Usage:
    python -m scripts.fetch_quote [--url http://localhost:8080/cotacao] [--output cotacao.txt]
"""

import argparse
import logging
import sys

from cotacao.client import run
from cotacao.config import ClientConfig
from cotacao.errors import CotacaoError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULTS = ClientConfig()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Fetch the quote from the server and save it")
    parser.add_argument("--url", default=DEFAULTS.server_url, help="Quote server endpoint")
    parser.add_argument("--output", default=DEFAULTS.output_path, help="Output file path")
    parser.add_argument("--timeout", type=float, default=DEFAULTS.timeout, help="Timeout (s)")
    args = parser.parse_args(argv)

    config = ClientConfig(server_url=args.url, output_path=args.output, timeout=args.timeout)
    try:
        run(config)
    except CotacaoError as e:
        logger.error("Failed to save quote: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
