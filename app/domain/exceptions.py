"""Centralized exception hierarchy for GardenGuard.

All domain and service exceptions inherit from :class:`GardenGuardError` so
that callers can catch a single base class when they need a broad safety net,
yet still match on specific subclasses where narrower handling is appropriate.

Blueprint-level error handling (see ``app/utils/http.safe_route``) maps these
to the correct HTTP status codes automatically.

Hierarchy
---------
::

    GardenGuardError (base — maps to 500)
    ├── ValidationError          (400 — bad input from caller)
    │   └── MediaError           (400 — undecodable / unsupported media)
    ├── NotFoundError            (404 — entity does not exist)
    ├── ConflictError            (409 — duplicate / submission in progress)
    └── ServiceError             (500 — business-logic failure)
        └── RepositoryError      (500 — database / persistence)
"""

from __future__ import annotations


class GardenGuardError(Exception):
    """Base exception for all GardenGuard application errors.

    Parameters
    ----------
    message:
        Human-readable description. For 4xx subclasses this is the text shown
        to the user; 5xx messages are shown as toast text and logged.
    detail:
        Optional machine-readable context dict attached to the error for
        structured logging.
    """

    http_status: int = 500

    def __init__(self, message: str = "", *, detail: dict | None = None) -> None:
        super().__init__(message)
        self.detail = detail or {}


# ── Client errors (4xx) ──────────────────────────────────────────────


class ValidationError(GardenGuardError):
    """Caller supplied invalid or incomplete input (HTTP 400)."""

    http_status: int = 400


class MediaError(ValidationError):
    """An uploaded blob could not be decoded or is not an image/video (HTTP 400)."""


class NotFoundError(GardenGuardError):
    """Requested entity does not exist (HTTP 404)."""

    http_status: int = 404


class ConflictError(GardenGuardError):
    """Operation conflicts with existing state (HTTP 409)."""

    http_status: int = 409


# ── Server errors (5xx) ──────────────────────────────────────────────


class ServiceError(GardenGuardError):
    """Business-logic failure in a service method (HTTP 500)."""

    http_status: int = 500


class RepositoryError(ServiceError):
    """Database / persistence layer failure (HTTP 500)."""

    http_status: int = 500
