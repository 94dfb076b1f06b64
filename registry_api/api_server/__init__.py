"""HTTP API: routes, envelope, access guard and app composition."""

from registry_api.api_server.server import create_app, serve

__all__ = ["create_app", "serve"]
