"""cotacao — USD-BRL quote service: fetch, persist, serve, and a file-writing client."""

__version__ = "0.1.0"
