"""Shared test fixtures."""

import sqlite3
import threading
import time

import pytest
from flask import Flask, Response
from werkzeug.serving import make_server

from cotacao.database import create_service
from cotacao.quotes import ensure_quote_schema


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def db_url(db_path):
    return f"sqlite:///{db_path}"


@pytest.fixture
def db_service(db_url):
    """Provide a fresh SQLite DatabaseService for each test."""
    service = create_service(db_url)
    service.connect()
    yield service
    service.close()


@pytest.fixture
def quote_db(db_service):
    """A DatabaseService with the cotacoes table in place."""
    ensure_quote_schema(db_service)
    return db_service


@pytest.fixture
def write_lock(db_path):
    """Return a callable that holds the database write lock until the test ends."""
    held = []

    def acquire():
        conn = sqlite3.connect(db_path, isolation_level=None)
        conn.execute("BEGIN IMMEDIATE")
        held.append(conn)
        return conn

    yield acquire
    for conn in held:
        conn.rollback()
        conn.close()


class StubHTTPServer:
    """In-process HTTP server answering every path with a canned response."""

    def __init__(self):
        self.status = 200
        self.body = ""
        self.mimetype = "application/json"
        self.delay = 0.0
        self.chunks: list[str] = []
        self.chunk_interval = 0.0
        self.hits = 0

        app = Flask("stub")

        @app.route("/", defaults={"path": ""})
        @app.route("/<path:path>")
        def respond(path):
            self.hits += 1
            if self.delay:
                time.sleep(self.delay)
            if self.chunks:
                return Response(self._drip(), status=self.status, mimetype=self.mimetype)
            return Response(self.body, status=self.status, mimetype=self.mimetype)

        self._server = make_server("127.0.0.1", 0, app, threaded=True)
        self.url = f"http://127.0.0.1:{self._server.server_port}"
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    def respond(self, body: str, status: int = 200, delay: float = 0.0, mimetype: str = "application/json"):
        self.body = body
        self.status = status
        self.delay = delay
        self.mimetype = mimetype
        self.chunks = []

    def respond_chunked(self, chunks: list[str], interval: float):
        """Stream `chunks` with a pause before each one after the first."""
        self.chunks = chunks
        self.chunk_interval = interval
        self.status = 200
        self.delay = 0.0
        self.mimetype = "application/json"

    def _drip(self):
        for i, chunk in enumerate(self.chunks):
            if i:
                time.sleep(self.chunk_interval)
            yield chunk

    def start(self):
        self._thread.start()

    def stop(self):
        self._server.shutdown()
        self._server.server_close()


@pytest.fixture
def http_stub():
    server = StubHTTPServer()
    server.start()
    yield server
    server.stop()
