"""WSGI entry point for the GardenGuard reports application.

This module provides a minimal CLI entrypoint used both in development and
production. Configuration comes from ``GARDENGUARD_*`` environment variables.
"""
from __future__ import annotations

import logging
import os

from app import create_app

app = create_app()


def _env_flag_true(name: str) -> bool:
    v = os.getenv(name)
    return bool(v and v.lower() in ("1", "true", "yes", "on"))


def main() -> int:
    host = os.getenv("GARDENGUARD_HOST", "0.0.0.0")
    port = int(os.getenv("GARDENGUARD_PORT", "8000"))
    debug = _env_flag_true("GARDENGUARD_DEBUG")

    logging.info("Starting server on %s:%s", host, port)

    try:
        app.run(host=host, port=port, debug=debug, use_reloader=False)
        logging.info("Server stopped.")
        return 0
    except KeyboardInterrupt:
        logging.info("Server stopped by user.")
        return 0
    except Exception as exc:  # pragma: no cover - top-level runtime errors
        logging.exception("ERROR: Failed to start server: %s", exc)
        return 1


if __name__ == "__main__":
    # Mirrors the `gardenguard` console script.
    raise SystemExit(main())
