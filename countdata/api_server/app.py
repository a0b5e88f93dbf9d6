"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn countdata.api_server.app:app --host 0.0.0.0 --port 5000
"""

from countdata.api_server.server import app

__all__ = ["app"]
