"""
Application package initializer.

The API is organised in layers: ``schemas`` and ``validation`` for the
inbound and outbound representations, ``services`` for business
logic, ``repositories`` for SQLite access and ``api`` for the versioned
routers.  ``main`` composes them into a FastAPI application.
"""

from .main import app  # noqa: F401
