"""UI routes returning HTML via Jinja2 templates."""

import logging
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from moviesapp.api.dependencies import get_tmdb_client
from moviesapp.core.errors import CatalogError
from moviesapp.models.media import MovieDetail, MovieList
from moviesapp.services.tmdb import TMDBClient

router = APIRouter()
logger = logging.getLogger(__name__)

# Templates directory
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=BASE_DIR / "templates")
templates.env.globals["current_year"] = lambda: datetime.now().year

UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from TMDB"


async def _load_movies(client: TMDBClient, query: str | None) -> dict:
    """Fetch a listing and return the grid context (movies, error, status)."""
    try:
        payload = await client.list_movies(query)
        movies = MovieList.model_validate(payload.data).results
    except CatalogError as exc:
        return {"movies": [], "error": exc.message, "status_code": exc.status_code}
    except ValidationError as exc:
        logger.error("Could not parse movie list: %s", exc)
        return {"movies": [], "error": UNEXPECTED_RESPONSE_MESSAGE, "status_code": 500}
    return {"movies": movies, "error": None, "status_code": 200}


@router.get("/")
async def home(
    request: Request,
    query: str | None = None,
    client: TMDBClient = Depends(get_tmdb_client),
):
    """Render the home page: popular movies, or search results for ``query``."""
    context = await _load_movies(client, query)
    status_code = context.pop("status_code")

    return templates.TemplateResponse(
        request=request,
        name="index.html",
        context={**context, "query": query or ""},
        status_code=status_code,
    )


@router.get("/search")
async def search(
    request: Request,
    query: str | None = None,
    client: TMDBClient = Depends(get_tmdb_client),
):
    """Return the movie grid partial for the live search box (HTMX).

    Always 200 so HTMX swaps the inline error message in.
    """
    context = await _load_movies(client, query)
    context.pop("status_code")

    return templates.TemplateResponse(
        request=request,
        name="partials/movie_grid.html",
        context={**context, "query": query or ""},
    )


@router.get("/movie/{movie_id:path}")
async def movie_detail(
    request: Request,
    movie_id: str,
    client: TMDBClient = Depends(get_tmdb_client),
):
    """Render the movie detail page, or an error page with the matching status."""
    try:
        payload = await client.get_movie(movie_id)
        movie = MovieDetail.model_validate(payload.data)
    except CatalogError as exc:
        return _error_page(request, exc.message, exc.status_code)
    except ValidationError as exc:
        logger.error("Could not parse details for movie %s: %s", movie_id, exc)
        return _error_page(request, UNEXPECTED_RESPONSE_MESSAGE, 500)

    return templates.TemplateResponse(
        request=request,
        name="movie_detail.html",
        context={"movie": movie, "page_title": movie.title},
    )


def _error_page(request: Request, message: str, status_code: int):
    return templates.TemplateResponse(
        request=request,
        name="error.html",
        context={"message": message, "page_title": "Error"},
        status_code=status_code,
    )
