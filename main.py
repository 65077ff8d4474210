"""ASGI entry point so `uvicorn main:app` works from the repository root."""

from catalog_server.main import create_app

app = create_app()
application = app

__all__ = ("app", "application")
