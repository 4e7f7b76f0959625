"""
HTTP client for the movies API, used by the frontend.
"""

import os
from urllib.parse import quote

import requests

BASE_URL = os.getenv("MOVIES_API_URL", "http://localhost:3001/movies")
DEFAULT_ERROR = "An unexpected error occurred"


class ApiError(Exception):
    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        return response.reason or DEFAULT_ERROR

    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, list):
        return ", ".join(str(m) for m in message)
    if message:
        return str(message)
    return response.reason or DEFAULT_ERROR


def _is_blank(value):
    return value is None or str(value).strip() == ""


class MovieApiClient:
    def __init__(self, base_url=BASE_URL, timeout=10, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _handle(self, response):
        if not response.ok:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    def search_movies(self, query, page=1):
        """Search by title. Returns the raw {"data": {...}} payload."""
        if _is_blank(query):
            raise ApiError(400, "Search query is required")

        response = self.session.get(
            f"{self.base_url}/search",
            params={"q": query.strip(), "page": max(1, page)},
            timeout=self.timeout,
        )
        return self._handle(response)

    def get_favorites(self, page=1):
        response = self.session.get(
            f"{self.base_url}/favorites/list",
            params={"page": max(1, page)},
            timeout=self.timeout,
        )
        return self._handle(response)

    def add_to_favorites(self, movie):
        if _is_blank(movie.get("imdbID")):
            raise ApiError(400, "Movie ID is required")
        if _is_blank(movie.get("title")):
            raise ApiError(400, "Movie title is required")

        response = self.session.post(
            f"{self.base_url}/favorites",
            json={
                "title": movie.get("title"),
                "imdbID": movie.get("imdbID"),
                "year": movie.get("year"),
                "poster": movie.get("poster"),
            },
            timeout=self.timeout,
        )
        self._handle(response)

    def remove_from_favorites(self, imdb_id):
        if _is_blank(imdb_id):
            raise ApiError(400, "Movie ID is required")

        response = self.session.delete(
            f"{self.base_url}/favorites/{quote(imdb_id, safe='')}",
            timeout=self.timeout,
        )
        self._handle(response)

    def toggle_favorite(self, movie):
        """Add or remove depending on the movie's current isFavorite flag."""
        if movie.get("isFavorite"):
            self.remove_from_favorites(movie.get("imdbID"))
        else:
            self.add_to_favorites(movie)
