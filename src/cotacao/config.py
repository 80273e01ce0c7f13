"""Runtime configuration for the quote server and the client.

Defaults are the reference deployment: server on port 8080 backed by
database.db, client writing cotacao.txt.
"""

from dataclasses import dataclass

from cotacao.quotes.fetcher import AWESOMEAPI_BASE_URL, DEFAULT_PAIR, DEFAULT_TIMEOUT
from cotacao.quotes.store import DEFAULT_INSERT_DEADLINE


@dataclass(frozen=True)
class ServerConfig:
    database_url: str = "sqlite:///database.db"
    api_base_url: str = AWESOMEAPI_BASE_URL
    currency_pair: str = DEFAULT_PAIR
    http_timeout: float = DEFAULT_TIMEOUT
    db_timeout: float = DEFAULT_INSERT_DEADLINE
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class ClientConfig:
    server_url: str = "http://localhost:8080/cotacao"
    output_path: str = "cotacao.txt"
    timeout: float = 0.3
    label: str = "Dólar"
