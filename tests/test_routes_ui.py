import niquests
import pytest

from conftest import make_response, make_settings

POPULAR = {
    "page": 1,
    "results": [
        {
            "id": 550,
            "title": "Fight Club",
            "poster_path": "/fight.jpg",
            "release_date": "1999-10-15",
            "vote_average": 8.433,
        },
        {
            "id": 13,
            "title": "Forrest Gump",
            "poster_path": None,
            "release_date": "",
            "vote_average": 8.5,
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

DETAIL = {
    "id": 550,
    "title": "Fight Club",
    "poster_path": "/fight.jpg",
    "backdrop_path": "/fight-backdrop.jpg",
    "release_date": "1999-10-15",
    "vote_average": 8.433,
    "overview": "A ticking-time-bomb insomniac...",
    "runtime": 139,
    "genres": [{"id": 18, "name": "Drama"}],
    "production_countries": [{"iso_3166_1": "US", "name": "United States of America"}],
    "original_language": "en",
    "tagline": "Mischief. Mayhem. Soap.",
    "budget": 63000000,
    "revenue": 100853753,
    "status": "Released",
    "credits": {
        "cast": [
            {"id": 819, "name": "Edward Norton", "character": "Narrator"},
            {"id": 287, "name": "Brad Pitt", "character": "Tyler Durden"},
        ],
        "crew": [
            {"id": 7467, "name": "David Fincher", "job": "Director"},
        ],
    },
}


def test_home_lists_popular_movies(client, session):
    session.get.return_value = make_response(200, POPULAR)

    response = client.get("/")

    assert response.status_code == 200
    assert "Popular Movies" in response.text
    assert "Fight Club" in response.text
    assert "https://image.tmdb.org/t/p/w500/fight.jpg" in response.text
    assert 'href="/movie/550"' in response.text
    assert "8.4" in response.text
    assert "1999" in response.text


def test_home_with_query_shows_search_results(client, session):
    session.get.return_value = make_response(200, POPULAR)

    response = client.get("/?query=fight")

    assert response.status_code == 200
    assert "Popular Movies" not in response.text
    assert 'value="fight"' in response.text
    session.get.assert_awaited_once_with(
        "https://tmdb.test/3/search/movie?api_key=test-key&query=fight"
    )


def test_home_empty_results(client, session):
    session.get.return_value = make_response(200, {"page": 1, "results": []})

    response = client.get("/?query=zzzz")

    assert "No movies found. Try a different search!" in response.text


def test_home_upstream_failure(client, session):
    session.get.side_effect = niquests.exceptions.ConnectionError("refused")

    response = client.get("/")

    assert response.status_code == 500
    assert "Error: Failed to fetch movies" in response.text
    assert "No movies found" not in response.text


@pytest.mark.parametrize("settings", [make_settings(api_key=None)])
def test_home_missing_config(client, session, settings):
    response = client.get("/")

    assert response.status_code == 500
    assert "Missing required environment variables" in response.text
    session.get.assert_not_called()


def test_search_partial(client, session):
    session.get.return_value = make_response(200, POPULAR)

    response = client.get("/search?query=fight")

    assert response.status_code == 200
    assert response.text.lstrip().startswith('<div id="movie-grid">')
    assert "<html" not in response.text
    assert "Fight Club" in response.text


def test_search_partial_reports_errors_inline(client, session):
    session.get.return_value = make_response(500, {"status_message": "boom"})

    response = client.get("/search?query=fight")

    assert response.status_code == 200
    assert "Error: Failed to fetch movies" in response.text


def test_home_unexpected_payload(client, session):
    session.get.return_value = make_response(200, {"results": [{"title": "No id"}]})

    response = client.get("/")

    assert response.status_code == 500
    assert "Unexpected response from TMDB" in response.text


def test_movie_detail_page(client, session):
    session.get.return_value = make_response(200, DETAIL)

    response = client.get("/movie/550")

    assert response.status_code == 200
    text = response.text
    assert "Fight Club" in text
    assert "Mischief. Mayhem. Soap." in text
    assert "139 min" in text
    assert "Drama" in text
    assert "English" in text
    assert "United States of America" in text
    assert "David Fincher" in text
    assert "Edward Norton, Brad Pitt" in text
    assert "$63,000,000" in text
    assert "$100,853,753" in text
    assert "https://image.tmdb.org/t/p/original/fight-backdrop.jpg" in text


def test_movie_detail_not_found(client, session):
    session.get.return_value = make_response(404, {"success": False})

    response = client.get("/movie/999999")

    assert response.status_code == 404
    assert "Movie not found in TMDB" in response.text
    assert "Back to Home" in response.text


def test_movie_detail_blank_id(client, session):
    response = client.get("/movie/%20")

    assert response.status_code == 400
    assert "Missing movie ID" in response.text
    session.get.assert_not_called()


def test_movie_detail_upstream_failure(client, session):
    session.get.side_effect = niquests.exceptions.ConnectionError("refused")

    response = client.get("/movie/42")

    assert response.status_code == 500
    assert "Failed to fetch movie details" in response.text


def test_movie_detail_identifier_with_encoded_slash(client, session):
    session.get.return_value = make_response(404, {"success": False})

    response = client.get("/movie/a%2Fb")

    assert response.status_code == 404
    assert "Movie not found in TMDB" in response.text
    session.get.assert_awaited_once_with(
        "https://tmdb.test/3/movie/a%2Fb?api_key=test-key&append_to_response=credits"
    )
