# app/services/movies.py

import logging
from typing import Any, Dict, List, Optional

from app.db.favorites import FavoritesRepository
from app.errors import (
    InvalidSearchQueryError,
    MovieAlreadyExistsError,
    MovieNotFoundError,
)
from app.integrations.omdb import OmdbClient
from app.models.movies import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    FavoritesData,
    FavoritesResponse,
    MessageData,
    MessageResponse,
    MovieIn,
    MovieOut,
    SearchMoviesData,
    SearchMoviesResponse,
)

logger = logging.getLogger(__name__)


class MoviesService:
    """Search through OMDb and manage the favorites list."""

    def __init__(self, omdb: OmdbClient, favorites: FavoritesRepository):
        self.omdb = omdb
        self.favorites = favorites

    def search_movies(self, title: Optional[str], page: int = 1) -> SearchMoviesResponse:
        if title is None or not title.strip():
            raise InvalidSearchQueryError()

        result = self.omdb.search_movies(title, max(1, page))
        movies = self._with_favorite_status(result.movies)

        return SearchMoviesResponse(
            data=SearchMoviesData(
                movies=movies,
                count=len(movies),
                total_results=result.total_results,
            )
        )

    def add_to_favorites(self, movie: MovieIn) -> MessageResponse:
        if not self.favorites.add_if_absent(movie):
            raise MovieAlreadyExistsError(movie.imdb_id)

        logger.info("Movie added to favorites: %s", movie.imdb_id)

        return MessageResponse(data=MessageData(message="Movie added to favorites"))

    def remove_from_favorites(self, imdb_id: Optional[str]) -> MessageResponse:
        if imdb_id is None or not imdb_id.strip():
            raise InvalidSearchQueryError()

        if not self.favorites.remove(imdb_id):
            raise MovieNotFoundError(imdb_id)

        logger.info("Movie removed from favorites: %s", imdb_id)

        return MessageResponse(data=MessageData(message="Movie removed from favorites"))

    def get_favorites(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> FavoritesResponse:
        page = max(1, page)
        page_size = min(max(1, page_size), MAX_PAGE_SIZE)

        result = self.favorites.find_paginated(page, page_size)

        return FavoritesResponse(
            data=FavoritesData(
                favorites=result.items,
                count=len(result.items),
                total_results=str(result.total),
                current_page=page,
                total_pages=result.total_pages,
            )
        )

    def _with_favorite_status(self, movies: List[Dict[str, Any]]) -> List[MovieOut]:
        return [
            MovieOut(
                title=movie.get("Title") or "",
                imdb_id=movie.get("imdbID") or "",
                year=str(movie.get("Year") or ""),
                poster=movie.get("Poster") or "",
                is_favorite=self.favorites.exists(movie.get("imdbID") or ""),
            )
            for movie in movies
        ]
