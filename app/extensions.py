"""Flask Extension Instances and Initialisation."""

from flask import Flask
from flask_compress import Compress

# Flask-Compress instance, compresses JSON responses with gzip/brotli
compress = Compress()


def init_extensions(app: Flask) -> None:
    """Initialise Flask extension objects."""
    # Report lists with long descriptions compress well; PDFs and media are already compressed
    app.config.setdefault(
        "COMPRESS_MIMETYPES",
        [
            "text/html",
            "text/plain",
            "application/json",
        ],
    )
    app.config.setdefault("COMPRESS_MIN_SIZE", 256)  # Don't compress tiny responses
    compress.init_app(app)
