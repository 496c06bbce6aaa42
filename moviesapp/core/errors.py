"""Domain exceptions, each carrying the HTTP status it is reported with."""


class CatalogError(Exception):
    """Base class for errors surfaced to callers as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(CatalogError):
    """A required setting (credential or endpoint) is not configured."""

    status_code = 500


class BadRequestError(CatalogError):
    """The incoming request is missing something the caller must supply."""

    status_code = 400


class TMDBNotFoundError(CatalogError):
    """TMDB answered 404 for a detail lookup."""

    status_code = 404


class TMDBError(CatalogError):
    """Domain exception for TMDB failures."""

    status_code = 500

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception
