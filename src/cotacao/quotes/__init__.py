"""Quotes: upstream API client and rate storage."""

from cotacao.quotes.fetcher import AwesomeAPIFetcher, MockQuoteFetcher, QuoteFetcher
from cotacao.quotes.store import ensure_quote_schema, insert_quote, list_quotes

__all__ = [
    "QuoteFetcher",
    "AwesomeAPIFetcher",
    "MockQuoteFetcher",
    "ensure_quote_schema",
    "insert_quote",
    "list_quotes",
]
