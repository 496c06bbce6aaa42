"""TMDB service for listing, searching and fetching movie details.

Every call forwards exactly one GET to TMDB with the API key attached and
hands the body back untouched. Failures are mapped to the exceptions in
`moviesapp.core.errors`.
"""

import logging
import re
from typing import Any
from urllib.parse import quote, urlencode

import niquests
from pydantic import BaseModel, ConfigDict

from moviesapp.core.config import Settings
from moviesapp.core.errors import (
    BadRequestError,
    ConfigurationError,
    TMDBError,
    TMDBNotFoundError,
)

logger = logging.getLogger(__name__)

MISSING_CONFIG_MESSAGE = "Missing required environment variables"
MISSING_API_KEY_MESSAGE = "Missing API key"
MISSING_MOVIE_ID_MESSAGE = "Missing movie ID"
MOVIES_ERROR_MESSAGE = "Failed to fetch movies"
MOVIE_DETAILS_ERROR_MESSAGE = "Failed to fetch movie details"
MOVIE_NOT_FOUND_MESSAGE = "Movie not found in TMDB"


class UpstreamPayload(BaseModel):
    """A TMDB body as received, plus its decoded JSON value."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    data: Any


_API_KEY_PATTERN = re.compile(r"(api_key=)[^&]+")


def redact(url: str) -> str:
    """Hide the API key in a URL before it is logged."""
    return _API_KEY_PATTERN.sub(r"\1***", url)


def build_url(base: str, params: dict) -> str:
    """Append percent-encoded query parameters to ``base``.

    Spaces become ``%20`` rather than ``+``.
    """
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{urlencode(params, quote_via=quote)}"


def create_session(settings: Settings) -> niquests.AsyncSession:
    """Create the shared outbound session (no retries)."""
    session = niquests.AsyncSession()
    if settings.proxy:
        session.proxies = {"http": settings.proxy, "https": settings.proxy}
    return session


class TMDBClient:
    """Forwards catalog requests to TMDB using the injected settings."""

    def __init__(self, settings: Settings, session: niquests.AsyncSession):
        self.settings = settings
        self.session = session

    async def forward(
        self,
        url: str,
        error_message: str,
        not_found_message: str | None = None,
    ) -> UpstreamPayload:
        """Issue one GET and map the outcome.

        Args:
            url: Fully built upstream URL, credential included.
            error_message: Message for transport failures, non-success
                statuses and undecodable bodies.
            not_found_message: When given, a 404 raises `TMDBNotFoundError`
                with this message instead of the generic error.

        Returns:
            The upstream body bytes and their decoded JSON value.
        """
        safe_url = redact(url)
        logger.debug("GET %s", safe_url)
        try:
            response = await self.session.get(url)
        except niquests.exceptions.RequestException as exc:
            logger.error("TMDB request to %s failed: %s", safe_url, exc)
            raise TMDBError(error_message, exc) from exc

        status = response.status_code
        if status == 404 and not_found_message is not None:
            logger.info("TMDB returned 404 for %s", safe_url)
            raise TMDBNotFoundError(not_found_message)
        if not response.ok:
            logger.error("TMDB request to %s returned status %s", safe_url, status)
            raise TMDBError(error_message)

        try:
            data = response.json()
        except (niquests.exceptions.RequestException, ValueError) as exc:
            logger.error("TMDB returned invalid JSON for %s: %s", safe_url, exc)
            raise TMDBError(error_message, exc) from exc

        return UpstreamPayload(content=response.content or b"", data=data)

    async def list_movies(self, query: str | None = None) -> UpstreamPayload:
        """Search TMDB by title, or list popular movies when no query is given."""
        missing = self.settings.missing("api_key", "api_url_popular", "api_url_search")
        if missing:
            logger.error("Cannot list movies, missing settings: %s", ", ".join(missing))
            raise ConfigurationError(MISSING_CONFIG_MESSAGE)

        params = {"api_key": self.settings.api_key_value}
        if query:
            params["query"] = query
            url = build_url(self.settings.api_url_search, params)
        else:
            url = build_url(self.settings.api_url_popular, params)

        return await self.forward(url, MOVIES_ERROR_MESSAGE)

    async def get_movie(self, movie_id: str | int | None) -> UpstreamPayload:
        """Fetch full movie details with credits appended."""
        if self.settings.missing("api_key"):
            logger.error("Cannot fetch movie details, missing API_KEY")
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)
        if self.settings.missing("api_url_movie"):
            logger.error("Cannot fetch movie details, missing API_URL_MOVIE")
            raise ConfigurationError(MISSING_CONFIG_MESSAGE)

        movie_id = str(movie_id).strip() if movie_id is not None else ""
        if not movie_id:
            logger.warning("Movie details requested without an ID")
            raise BadRequestError(MISSING_MOVIE_ID_MESSAGE)

        base = f"{self.settings.api_url_movie.rstrip('/')}/{quote(movie_id, safe='')}"
        url = build_url(
            base,
            {"api_key": self.settings.api_key_value, "append_to_response": "credits"},
        )
        return await self.forward(
            url,
            MOVIE_DETAILS_ERROR_MESSAGE,
            not_found_message=MOVIE_NOT_FOUND_MESSAGE,
        )
