"""Media models for rendering TMDB payloads in the web UI."""

from typing import List, Optional

from pydantic import BaseModel

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
BACKDROP_BASE_URL = "https://image.tmdb.org/t/p/original"

LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "ja": "Japanese",
    "zh": "Chinese",
    "ko": "Korean",
    "ar": "Arabic",
    "hi": "Hindi",
}


def _format_dollars(amount: int) -> Optional[str]:
    return f"${amount:,}" if amount else None


class MovieSummary(BaseModel):
    """A movie as it appears in popular and search listings."""

    id: int
    title: str = "Unknown"
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = 0.0

    @property
    def poster_url(self) -> Optional[str]:
        return f"{POSTER_BASE_URL}{self.poster_path}" if self.poster_path else None

    @property
    def release_year(self) -> Optional[str]:
        return self.release_date[:4] if self.release_date else None

    @property
    def rating(self) -> str:
        return f"{self.vote_average:.1f}"


class MovieList(BaseModel):
    """One page of listing results."""

    page: int = 1
    results: List[MovieSummary] = []
    total_pages: int = 0
    total_results: int = 0


class Genre(BaseModel):
    id: int
    name: str


class ProductionCountry(BaseModel):
    iso_3166_1: str = ""
    name: str


class CastMember(BaseModel):
    id: int
    name: str
    character: str = ""


class CrewMember(BaseModel):
    id: int
    name: str
    job: str = ""


class Credits(BaseModel):
    """Cast and crew, in TMDB billing order."""

    cast: List[CastMember] = []
    crew: List[CrewMember] = []


class MovieDetail(MovieSummary):
    """A movie with full TMDB data, credits included."""

    backdrop_path: Optional[str] = None
    overview: Optional[str] = None
    runtime: Optional[int] = None
    genres: List[Genre] = []
    production_countries: List[ProductionCountry] = []
    original_language: str = ""
    tagline: Optional[str] = None
    budget: int = 0
    revenue: int = 0
    status: str = ""  # e.g., "Released", "Post Production"
    credits: Credits = Credits()

    @property
    def backdrop_url(self) -> Optional[str]:
        if not self.backdrop_path:
            return None
        return f"{BACKDROP_BASE_URL}{self.backdrop_path}"

    @property
    def genre_names(self) -> str:
        return ", ".join(genre.name for genre in self.genres)

    @property
    def language_name(self) -> str:
        return LANGUAGE_NAMES.get(self.original_language, self.original_language)

    @property
    def countries(self) -> str:
        names = ", ".join(country.name for country in self.production_countries)
        return names or "N/A"

    @property
    def director(self) -> str:
        for person in self.credits.crew:
            if person.job == "Director":
                return person.name
        return "N/A"

    @property
    def main_stars(self) -> str:
        stars = [member.name for member in self.credits.cast[:5]]
        return ", ".join(stars) if stars else "N/A"

    @property
    def budget_display(self) -> Optional[str]:
        return _format_dollars(self.budget)

    @property
    def revenue_display(self) -> Optional[str]:
        return _format_dollars(self.revenue)
