# app/models/movies.py

import re
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(value: Any, default: int) -> int:
    """Lenient query-string int: anything unparseable becomes the default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    # "3.7" -> 3, "2abc" -> 2, "abc" -> default
    match = _LEADING_INT.match(str(value))
    if match is None:
        return default
    return int(match.group(1))


# ---- request models ----

class MovieIn(BaseModel):
    title: str
    imdb_id: str = Field(alias="imdbID")
    year: str
    poster: str = ""

    class Config:
        populate_by_name = True

    @field_validator("title", "imdb_id", "year")
    @classmethod
    def not_empty(cls, value: str, info) -> str:
        if not value.strip():
            name = "imdbID" if info.field_name == "imdb_id" else info.field_name
            raise ValueError(f"{name} should not be empty")
        return value

    @field_validator("poster", mode="before")
    @classmethod
    def default_poster(cls, value):
        return "" if value is None else value


class SearchMoviesQuery(BaseModel):
    q: Optional[str] = Field(default=None, validate_default=True)
    page: int = 1

    @field_validator("q")
    @classmethod
    def query_required(cls, value: Optional[str]) -> str:
        if value is None or value == "":
            raise ValueError("Search query is required")
        return value

    @field_validator("page", mode="before")
    @classmethod
    def parse_page(cls, value):
        return _to_int(value, 1)

    @field_validator("page")
    @classmethod
    def page_min(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Page must be at least 1")
        return value


class PaginationQuery(BaseModel):
    page: int = 1
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, alias="pageSize")

    class Config:
        populate_by_name = True

    @field_validator("page", mode="before")
    @classmethod
    def parse_page(cls, value):
        return _to_int(value, 1)

    @field_validator("page_size", mode="before")
    @classmethod
    def parse_page_size(cls, value):
        return _to_int(value, DEFAULT_PAGE_SIZE)

    @field_validator("page")
    @classmethod
    def page_min(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Page must be at least 1")
        return value

    @field_validator("page_size")
    @classmethod
    def page_size_range(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Page size must be at least 1")
        if value > MAX_PAGE_SIZE:
            raise ValueError(f"Page size must not exceed {MAX_PAGE_SIZE}")
        return value


# ---- stored / response models ----

class FavoriteMovie(BaseModel):
    title: str
    imdb_id: str = Field(alias="imdbID")
    year: str
    poster: str

    class Config:
        populate_by_name = True


class MovieOut(BaseModel):
    title: str
    imdb_id: str = Field(alias="imdbID")
    year: str
    poster: str
    is_favorite: bool = Field(alias="isFavorite")

    class Config:
        populate_by_name = True


class SearchMoviesData(BaseModel):
    movies: List[MovieOut]
    count: int
    total_results: str = Field(alias="totalResults")

    class Config:
        populate_by_name = True


class SearchMoviesResponse(BaseModel):
    data: SearchMoviesData


class FavoritesData(BaseModel):
    favorites: List[FavoriteMovie]
    count: int
    total_results: str = Field(alias="totalResults")
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True


class FavoritesResponse(BaseModel):
    data: FavoritesData


class MessageData(BaseModel):
    message: str


class MessageResponse(BaseModel):
    data: MessageData
