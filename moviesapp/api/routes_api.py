"""API routes returning JSON for the browser or external tools."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from moviesapp.api.dependencies import get_tmdb_client
from moviesapp.services.tmdb import TMDBClient

router = APIRouter()


@router.get("/movies")
async def api_movies(
    query: str | None = Query(None, description="Optional title search"),
    client: TMDBClient = Depends(get_tmdb_client),
):
    """List popular movies, or search by title when a query is given.

    The TMDB body is relayed as received.
    """
    payload = await client.list_movies(query)
    return Response(content=payload.content, media_type="application/json")


@router.get("/movies/{movie_id:path}")
async def api_movie_details(
    movie_id: str,
    client: TMDBClient = Depends(get_tmdb_client),
):
    """Get full details for one movie, credits included."""
    payload = await client.get_movie(movie_id)
    return Response(content=payload.content, media_type="application/json")


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "movies-app"}
