"""Quote server: Flask app factory and startup bootstrap."""

from cotacao.server.app import bootstrap, create_app

__all__ = ["bootstrap", "create_app"]
