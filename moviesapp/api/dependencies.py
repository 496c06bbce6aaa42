"""FastAPI dependencies shared by the API and UI routers."""

from fastapi import Depends, Request

from moviesapp.core.config import Settings, get_settings
from moviesapp.services.tmdb import TMDBClient


def get_tmdb_client(
    request: Request, settings: Settings = Depends(get_settings)
) -> TMDBClient:
    """Bind the injected settings to the session opened in the app lifespan."""
    return TMDBClient(settings, request.app.state.http_session)
