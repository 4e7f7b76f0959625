"""
Integration tests for the /movies HTTP surface.

The service runs against a real file-backed repository in a temporary
directory; only OMDb is mocked.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app.api.movies import get_movies_service
from app.db.favorites import FavoritesRepository
from app.errors import ExternalApiError
from app.integrations.omdb import SearchResult
from app.main import app
from app.services.movies import MoviesService

MATRIX = {
    "title": "The Matrix",
    "imdbID": "tt0133093",
    "year": "1999",
    "poster": "https://example.com/poster.jpg",
}


class MoviesApiTestCase(unittest.TestCase):

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)

        self.repository = FavoritesRepository(Path(tmp.name) / "favorites.json")
        self.repository.load()
        self.omdb = MagicMock()
        self.omdb.search_movies.return_value = SearchResult()
        service = MoviesService(omdb=self.omdb, favorites=self.repository)

        app.dependency_overrides[get_movies_service] = lambda: service
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def add_favorite(self, **overrides):
        return self.client.post("/movies/favorites", json={**MATRIX, **overrides})


class TestSearchEndpoint(MoviesApiTestCase):

    def test_search_returns_annotated_movies(self):
        self.omdb.search_movies.return_value = SearchResult(
            movies=[
                {"Title": "The Matrix", "Year": "1999", "imdbID": "tt0133093", "Type": "movie", "Poster": "p1"},
                {"Title": "The Matrix Reloaded", "Year": "2003", "imdbID": "tt0234215", "Type": "movie", "Poster": "p2"},
            ],
            total_results="2",
        )
        self.add_favorite()

        response = self.client.get("/movies/search", params={"q": "Matrix"})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["count"], 2)
        self.assertEqual(data["totalResults"], "2")
        self.assertEqual(
            data["movies"][0],
            {"title": "The Matrix", "imdbID": "tt0133093", "year": "1999", "poster": "p1", "isFavorite": True},
        )
        self.assertFalse(data["movies"][1]["isFavorite"])
        self.omdb.search_movies.assert_called_once_with("Matrix", 1)

    def test_search_passes_page(self):
        self.client.get("/movies/search", params={"q": "Matrix", "page": "2"})

        self.omdb.search_movies.assert_called_once_with("Matrix", 2)

    def test_search_non_numeric_page_defaults_to_one(self):
        response = self.client.get("/movies/search", params={"q": "Matrix", "page": "abc"})

        self.assertEqual(response.status_code, 200)
        self.omdb.search_movies.assert_called_once_with("Matrix", 1)

    def test_search_decimal_page_uses_integer_part(self):
        self.client.get("/movies/search", params={"q": "Matrix", "page": "3.7"})

        self.omdb.search_movies.assert_called_once_with("Matrix", 3)

    def test_search_page_with_trailing_text(self):
        self.client.get("/movies/search", params={"q": "Matrix", "page": "2abc"})

        self.omdb.search_movies.assert_called_once_with("Matrix", 2)

    def test_search_null_provider_fields(self):
        """Incomplete OMDb items are passed through, not reported as bad requests."""
        self.omdb.search_movies.return_value = SearchResult(
            movies=[{"Title": None, "Year": "1999", "imdbID": "tt0133093", "Poster": None}],
            total_results="1",
        )

        response = self.client.get("/movies/search", params={"q": "Matrix"})

        self.assertEqual(response.status_code, 200)
        movie = response.json()["data"]["movies"][0]
        self.assertEqual(movie["title"], "")
        self.assertEqual(movie["poster"], "")

    def test_search_missing_query(self):
        response = self.client.get("/movies/search")

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["statusCode"], 400)
        self.assertEqual(body["path"], "/movies/search")
        self.assertEqual(body["method"], "GET")
        self.assertIn("Search query is required", body["message"])
        self.omdb.search_movies.assert_not_called()

    def test_search_blank_query(self):
        response = self.client.get("/movies/search", params={"q": "   "})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Search query must be a non-empty string")

    def test_search_page_below_one(self):
        response = self.client.get("/movies/search", params={"q": "Matrix", "page": "0"})

        self.assertEqual(response.status_code, 400)
        self.assertIn("Page must be at least 1", response.json()["message"])

    def test_search_provider_unavailable(self):
        self.omdb.search_movies.side_effect = ExternalApiError("OMDB", "Network Error")

        response = self.client.get("/movies/search", params={"q": "Matrix"})

        self.assertEqual(response.status_code, 503)
        self.assertEqual(
            response.json()["message"],
            "External service 'OMDB' is unavailable: Network Error",
        )


class TestFavoritesEndpoints(MoviesApiTestCase):

    def test_add_favorite(self):
        response = self.add_favorite()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json(), {"data": {"message": "Movie added to favorites"}})
        self.assertTrue(self.repository.exists("tt0133093"))

    def test_add_favorite_without_poster(self):
        body = {k: v for k, v in MATRIX.items() if k != "poster"}

        response = self.client.post("/movies/favorites", json=body)

        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.repository.find_by_imdb_id("tt0133093").poster, "")

    def test_add_favorite_ignores_extra_fields(self):
        response = self.add_favorite(isFavorite=False, rating="9.9")

        self.assertEqual(response.status_code, 201)

    def test_add_duplicate_favorite(self):
        self.add_favorite()

        response = self.add_favorite(imdbID="TT0133093")

        self.assertEqual(response.status_code, 409)
        self.assertIn("already exists", response.json()["message"])
        self.assertEqual(self.repository.count(), 1)

    def test_add_favorite_invalid_body(self):
        response = self.client.post("/movies/favorites", json={"title": "", "year": "1999"})

        self.assertEqual(response.status_code, 400)
        message = response.json()["message"]
        self.assertIsInstance(message, list)
        self.assertIn("title should not be empty", message)
        self.assertEqual(self.repository.count(), 0)

    def test_remove_favorite(self):
        self.add_favorite()

        response = self.client.delete("/movies/favorites/tt0133093")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"data": {"message": "Movie removed from favorites"}})
        self.assertFalse(self.repository.exists("tt0133093"))

    def test_remove_missing_favorite(self):
        response = self.client.delete("/movies/favorites/tt0000000")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Movie with imdbID 'tt0000000' not found")

    def test_list_favorites(self):
        for i in range(12):
            self.add_favorite(imdbID=f"tt{i:07d}", title=f"Movie {i}")

        response = self.client.get("/movies/favorites/list", params={"page": 2, "pageSize": 5})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual([m["title"] for m in data["favorites"]], [f"Movie {i}" for i in range(5, 10)])
        self.assertEqual(data["count"], 5)
        self.assertEqual(data["totalResults"], "12")
        self.assertEqual(data["currentPage"], 2)
        self.assertEqual(data["totalPages"], 3)

    def test_list_favorites_decimal_page_size(self):
        for i in range(7):
            self.add_favorite(imdbID=f"tt{i:07d}", title=f"Movie {i}")

        response = self.client.get("/movies/favorites/list", params={"pageSize": "5.5"})

        data = response.json()["data"]
        self.assertEqual(data["count"], 5)
        self.assertEqual(data["totalPages"], 2)

    def test_list_favorites_defaults(self):
        response = self.client.get("/movies/favorites/list")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"data": {"favorites": [], "count": 0, "totalResults": "0", "currentPage": 1, "totalPages": 0}},
        )

    def test_list_favorites_page_size_too_large(self):
        response = self.client.get("/movies/favorites/list", params={"pageSize": 101})

        self.assertEqual(response.status_code, 400)
        self.assertIn("Page size must not exceed 100", response.json()["message"])

    def test_list_favorites_page_below_one(self):
        response = self.client.get("/movies/favorites/list", params={"page": 0})

        self.assertEqual(response.status_code, 400)
        self.assertIn("Page must be at least 1", response.json()["message"])


class TestHealth(unittest.TestCase):

    def test_health_check(self):
        response = TestClient(app).get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
