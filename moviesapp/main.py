import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from moviesapp.api.routes_api import router as api_router
from moviesapp.api.routes_ui import router as ui_router
from moviesapp.core.config import get_settings
from moviesapp.core.errors import CatalogError
from moviesapp.core.middleware import RequestLoggingMiddleware
from moviesapp.services.tmdb import create_session

load_dotenv()

logger = logging.getLogger(__name__)

# Paths
BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Open the shared TMDB session and close it on shutdown."""
    settings = get_settings()
    missing = settings.missing(
        "api_key", "api_url_popular", "api_url_search", "api_url_movie"
    )
    if missing:
        logger.warning(
            "Missing environment variables: %s. Affected routes will return 500.",
            ", ".join(missing),
        )

    app.state.http_session = create_session(settings)
    try:
        yield
    finally:
        try:
            await app.state.http_session.close()
        except Exception as e:
            logger.error(f"Error closing TMDB session: {e}")


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Report domain errors as ``{"error": message}`` with their status."""
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


app = FastAPI(
    title="Movies App",
    description="Browse popular movies, search titles and view details from TMDB",
    version="0.1.0",
    lifespan=app_lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
app.add_exception_handler(CatalogError, catalog_error_handler)

# Mount static files
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Include routers
app.include_router(ui_router)
app.include_router(api_router, prefix="/api")
