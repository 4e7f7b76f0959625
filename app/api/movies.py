# app/api/movies.py

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.config import get_settings
from app.db.engine import get_repository
from app.integrations.omdb import OmdbClient
from app.models.movies import (
    FavoritesResponse,
    MessageResponse,
    MovieIn,
    PaginationQuery,
    SearchMoviesQuery,
    SearchMoviesResponse,
)
from app.services.movies import MoviesService

router = APIRouter(prefix="/movies", tags=["movies"])


@lru_cache
def get_movies_service() -> MoviesService:
    settings = get_settings()
    omdb = OmdbClient(
        api_key=settings.omdb_api_key,
        base_url=settings.omdb_base_url,
        timeout=settings.omdb_timeout,
    )
    return MoviesService(omdb=omdb, favorites=get_repository())


def search_params(
    q: Optional[str] = Query(default=None, description="Search query for movie titles"),
    page: Optional[str] = Query(default=None, description="Page number, starting at 1"),
) -> SearchMoviesQuery:
    try:
        return SearchMoviesQuery(q=q, page=page)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


def pagination_params(
    page: Optional[str] = Query(default=None, description="Page number, starting at 1"),
    page_size: Optional[str] = Query(
        default=None,
        alias="pageSize",
        description="Items per page (1-100, default 10)",
    ),
) -> PaginationQuery:
    try:
        return PaginationQuery(page=page, page_size=page_size)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.get("/search", response_model=SearchMoviesResponse)
def search_movies(
    params: SearchMoviesQuery = Depends(search_params),
    service: MoviesService = Depends(get_movies_service),
) -> SearchMoviesResponse:
    """
    Search OMDb by title; each result carries its favorite status.
    """
    return service.search_movies(params.q, params.page)


@router.post(
    "/favorites",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_to_favorites(
    movie: MovieIn,
    service: MoviesService = Depends(get_movies_service),
) -> MessageResponse:
    return service.add_to_favorites(movie)


@router.delete("/favorites/{imdbID}", response_model=MessageResponse)
def remove_from_favorites(
    imdb_id: str = Path(alias="imdbID", description="IMDb ID, e.g. tt0133093"),
    service: MoviesService = Depends(get_movies_service),
) -> MessageResponse:
    return service.remove_from_favorites(imdb_id)


@router.get("/favorites/list", response_model=FavoritesResponse)
def list_favorites(
    params: PaginationQuery = Depends(pagination_params),
    service: MoviesService = Depends(get_movies_service),
) -> FavoritesResponse:
    """
    Paginated favorites, in the order they were added.
    """
    return service.get_favorites(params.page, params.page_size)
