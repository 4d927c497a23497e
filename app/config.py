"""
Configuration for GardenGuard
=============================
Main application runtime settings, read from ``GARDENGUARD_*`` environment
variables with development-friendly defaults.
Sets up the logging configuration as well.
"""

import os
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from app.enums.common import ConditionSortMode


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("GARDENGUARD_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("GARDENGUARD_SECRET_KEY", "GardenGuardDevSecretKey"))
    database_path: str = field(
        default_factory=lambda: os.getenv("GARDENGUARD_DATABASE_PATH", "database/gardenguard.db")
    )

    # Uploaded photos and videos
    media_dir: str = field(default_factory=lambda: os.getenv("GARDENGUARD_MEDIA_DIR", "media"))
    media_url_prefix: str = field(default_factory=lambda: os.getenv("GARDENGUARD_MEDIA_URL_PREFIX", "/media"))
    max_upload_mb: int = field(default_factory=lambda: _env_int("GARDENGUARD_MAX_UPLOAD_MB", 16))

    # Dashboard
    page_size: int = field(default_factory=lambda: _env_int("GARDENGUARD_PAGE_SIZE", 10))
    condition_sort_mode: str = field(
        default_factory=lambda: os.getenv("GARDENGUARD_CONDITION_SORT_MODE", ConditionSortMode.DISPLAY_ORDER.value)
    )

    share_base_url: str = field(default_factory=lambda: os.getenv("GARDENGUARD_SHARE_BASE_URL", "https://wa.me/"))
    seed_catalog: bool = field(default_factory=lambda: _env_bool("GARDENGUARD_SEED_CATALOG", True))

    debug: bool = field(default_factory=lambda: _env_bool("GARDENGUARD_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("GARDENGUARD_LOG_LEVEL", "INFO"))
    log_dir: str = field(default_factory=lambda: os.getenv("GARDENGUARD_LOG_DIR", "logs"))

    # Default insecure secret key - used only for detection
    _DEFAULT_SECRET_KEY: str = field(default="GardenGuardDevSecretKey", init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.environment == "production" and self.secret_key == self._DEFAULT_SECRET_KEY:
            raise RuntimeError(
                "SECURITY ERROR: Cannot use default secret key in production!\n"
                "Set GARDENGUARD_SECRET_KEY environment variable to a secure random value.\n"
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )

        valid_modes = {mode.value for mode in ConditionSortMode}
        if self.condition_sort_mode not in valid_modes:
            raise ValueError(
                f"GARDENGUARD_CONDITION_SORT_MODE must be one of {sorted(valid_modes)}, "
                f"got {self.condition_sort_mode!r}"
            )
        if self.page_size < 1:
            raise ValueError("GARDENGUARD_PAGE_SIZE must be at least 1.")

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        secret = self.secret_key or os.getenv("FLASK_SECRET_KEY", "")
        if not secret:
            raise RuntimeError(
                "Missing GARDENGUARD_SECRET_KEY or FLASK_SECRET_KEY environment variable. "
                "Production systems must set an explicit secret key."
            )

        return {
            "ENV": self.environment,
            "SECRET_KEY": secret,
            "DATABASE_PATH": self.database_path,
            "MEDIA_DIR": self.media_dir,
            "MEDIA_URL_PREFIX": self.media_url_prefix,
            "PAGE_SIZE": self.page_size,
            "CONDITION_SORT_MODE": self.condition_sort_mode,
            "DEBUG": self.debug,
            # Reject request bodies larger than configured limit (default 16 MB)
            "MAX_CONTENT_LENGTH": self.max_upload_mb * 1024 * 1024,
        }


def setup_logging(debug: bool = False, log_dir: str = "logs", level: str | None = None) -> None:
    """Setup logging configuration."""
    import logging
    import sys
    from logging.handlers import RotatingFileHandler

    if debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName((level or "INFO").upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    # Root logger
    root = logging.getLogger()
    root.setLevel(log_level)

    # Keep existing handlers but avoid adding duplicates when create_app is called multiple times
    has_console = any(getattr(h, "name", "") == "gardenguard_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "gardenguard_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8 so condition icons survive Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "gardenguard_console"
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    # File handler
    if not has_file:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "gardenguard.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "gardenguard_file"
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    # Ensure handler levels follow the desired log level
    for handler in root.handlers:
        if getattr(handler, "name", "") in {"gardenguard_console", "gardenguard_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info(f"Logging initialized at level: {logging.getLevelName(log_level)}")

    if _env_bool("GARDENGUARD_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    return AppConfig()
