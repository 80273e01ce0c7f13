"""Client side: fetch the bid from the quote server and write it to a file."""

import logging
import os
from pathlib import Path

import requests

from cotacao.config import ClientConfig
from cotacao.errors import ClientFetchFailure, FileWriteFailure
from cotacao.http_client import get_json

logger = logging.getLogger(__name__)

OUTPUT_FILE_MODE = 0o644


def fetch_bid(server_url: str, timeout: float) -> str:
    """GET the quote server and return the `bid` field of its JSON body."""
    try:
        bid = get_json(server_url, timeout)["bid"]
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        raise ClientFetchFailure(f"GET {server_url} failed: {e}") from e
    if not isinstance(bid, str):
        raise ClientFetchFailure(f"bid is not a string: {bid!r}")
    return bid


def write_quote(path: str | Path, bid: str, label: str = "Dólar") -> str:
    """Overwrite `path` with a single "<label>: <bid>" line and return it."""
    content = f"{label}: {bid}"
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OUTPUT_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise FileWriteFailure(f"cannot write {path}: {e}") from e
    return content


def run(config: ClientConfig) -> str:
    """Fetch then write. The file is only touched after a successful fetch."""
    bid = fetch_bid(config.server_url, config.timeout)
    content = write_quote(config.output_path, bid, config.label)
    logger.info("Saved to %s: %s", config.output_path, content)
    return content
