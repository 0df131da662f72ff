"""Entry point that serves the Library Book API with Uvicorn.

Host and port are read from the environment variables ``HOST`` and
``PORT`` (defaults ``0.0.0.0`` and ``8000``).  Everything else, such as
the database location and log level, is configured through the
variables read by ``library_api.app.core.config``.

Usage:
    python run.py
"""
import os

from uvicorn import Config, Server


def main() -> None:
    """Start the API server and block until it stops."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(
        app="library_api.app.main:app",
        host=host,
        port=port,
        reload=False,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
    server = Server(config)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
