"""Tests for the /cotacao endpoint and server bootstrap."""

import json

import pytest

from cotacao.config import ServerConfig
from cotacao.database import create_service
from cotacao.errors import StorageUnavailable
from cotacao.quotes import MockQuoteFetcher, list_quotes
from cotacao.server import bootstrap, create_app
from scripts import serve


def _count_rows(db_url: str) -> int:
    service = create_service(db_url)
    service.connect()
    try:
        return len(list_quotes(service))
    finally:
        service.close()


@pytest.fixture
def config(db_url):
    cfg = ServerConfig(database_url=db_url)
    bootstrap(cfg)
    return cfg


class TestCotacaoEndpoint:
    def test_returns_bid_and_stores_row(self, config):
        client = create_app(config, MockQuoteFetcher("5.43")).test_client()

        resp = client.get("/cotacao")

        assert resp.status_code == 200
        assert resp.mimetype == "application/json"
        assert resp.get_json() == {"bid": "5.43"}
        assert _count_rows(config.database_url) == 1

    def test_each_request_stores_one_row(self, config):
        client = create_app(config, MockQuoteFetcher()).test_client()
        for _ in range(3):
            assert client.get("/cotacao").status_code == 200
        assert _count_rows(config.database_url) == 3

    def test_live_fetcher_against_upstream(self, config, http_stub):
        http_stub.respond(json.dumps({"USDBRL": {"bid": "5.4310", "ask": "5.4320"}}))
        cfg = ServerConfig(database_url=config.database_url, api_base_url=http_stub.url)
        client = create_app(cfg).test_client()

        resp = client.get("/cotacao")

        assert resp.status_code == 200
        assert resp.get_json() == {"bid": "5.4310"}
        assert _count_rows(cfg.database_url) == 1

    def test_upstream_timeout(self, config, http_stub):
        http_stub.respond('{"USDBRL": {"bid": "5.43"}}', delay=0.6)
        cfg = ServerConfig(database_url=config.database_url, api_base_url=http_stub.url)
        client = create_app(cfg).test_client()

        resp = client.get("/cotacao")

        assert resp.status_code == 500
        assert resp.mimetype == "text/plain"
        assert resp.get_data(as_text=True).startswith("fetch error:")
        assert _count_rows(cfg.database_url) == 0

    def test_malformed_upstream_is_not_stored(self, config, http_stub):
        http_stub.respond('{"USDBRL": {}}')
        cfg = ServerConfig(database_url=config.database_url, api_base_url=http_stub.url)

        resp = create_app(cfg).test_client().get("/cotacao")

        assert resp.status_code == 500
        assert _count_rows(cfg.database_url) == 0

    def test_insert_deadline(self, config, write_lock):
        client = create_app(config, MockQuoteFetcher("5.43")).test_client()
        lock = write_lock()

        resp = client.get("/cotacao")

        assert resp.status_code == 500
        assert resp.get_data(as_text=True).startswith("persistence error:")
        lock.rollback()
        assert _count_rows(config.database_url) == 0

    def test_database_connection_error(self, tmp_path):
        cfg = ServerConfig(database_url=f"sqlite:///{tmp_path / 'missing' / 'db.db'}")
        client = create_app(cfg, MockQuoteFetcher()).test_client()

        resp = client.get("/cotacao")

        assert resp.status_code == 500
        assert resp.get_data(as_text=True) == "database connection error"

    def test_unknown_route(self, config):
        client = create_app(config, MockQuoteFetcher()).test_client()
        assert client.get("/").status_code == 404


class TestBootstrap:
    def test_idempotent(self, config):
        bootstrap(config)
        service = create_service(config.database_url)
        service.connect()
        try:
            with service.transaction():
                rows = service.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'cotacoes'"
                )
        finally:
            service.close()
        assert len(rows) == 1

    def test_unopenable_database(self, tmp_path):
        cfg = ServerConfig(database_url=f"sqlite:///{tmp_path / 'missing' / 'db.db'}")
        with pytest.raises(StorageUnavailable):
            bootstrap(cfg)

    def test_serve_script_exits_on_bootstrap_failure(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            serve.main(["--db-url", f"sqlite:///{tmp_path / 'missing' / 'db.db'}"])
        assert exc_info.value.code == 1
