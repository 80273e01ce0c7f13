"""Quote client: fetch from the server, write to a local file."""

from cotacao.client.fetcher import fetch_bid, run, write_quote

__all__ = ["fetch_bid", "run", "write_quote"]
