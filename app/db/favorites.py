# app/db/favorites.py
"""
Favorites store: an in-memory list of FavoriteMovie mirrored to a JSON file.

The file holds a plain array:

    [
      {"title": "The Matrix", "imdbID": "tt0133093", "year": "1999", "poster": "..."}
    ]

Lookups by imdbID are case-insensitive.
"""

import json
import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from app.errors import FavoritesStorageError
from app.models.movies import FavoriteMovie, MovieIn

logger = logging.getLogger(__name__)


@dataclass
class FavoritesPage:
    items: List[FavoriteMovie]
    total: int
    total_pages: int


def _is_valid_entry(entry) -> bool:
    if not isinstance(entry, dict):
        return False
    year = entry.get("year")
    return (
        isinstance(entry.get("title"), str)
        and isinstance(entry.get("imdbID"), str)
        and isinstance(year, (str, int, float))
        and not isinstance(year, bool)
        and isinstance(entry.get("poster"), str)
    )


def _entry_to_movie(entry: dict) -> FavoriteMovie:
    year = entry["year"]
    if isinstance(year, float) and year.is_integer():
        year = int(year)
    return FavoriteMovie(
        title=entry["title"],
        imdb_id=entry["imdbID"],
        year=str(year),
        poster=entry["poster"],
    )


def _to_favorite(movie: MovieIn) -> FavoriteMovie:
    return FavoriteMovie(
        title=movie.title,
        imdb_id=movie.imdb_id,
        year=str(movie.year),
        poster=movie.poster,
    )


class FavoritesRepository:
    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)
        self.data_dir = self.file_path.parent
        self._favorites: List[FavoriteMovie] = []
        self._lock = threading.Lock()

    # ---- file handling ----

    def load(self) -> None:
        """Read the favorites file, creating it (and its directory) when missing."""
        self._ensure_data_dir()

        if not self.file_path.exists():
            logger.info("Favorites file not found, initializing empty list")
            self._favorites = []
            self._save()
            return

        try:
            with open(self.file_path, encoding="utf-8") as f:
                parsed = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Error loading favorites: %s", e)
            self._favorites = []
            return

        if not isinstance(parsed, list):
            logger.warning("Invalid favorites file format, initializing empty list")
            self._favorites = []
            return

        valid = [entry for entry in parsed if _is_valid_entry(entry)]
        if len(valid) < len(parsed):
            logger.warning("Skipped %s invalid favorites entries", len(parsed) - len(valid))

        self._favorites = [_entry_to_movie(entry) for entry in valid]
        logger.info("Loaded %s favorites from file", len(self._favorites))

    def _ensure_data_dir(self) -> None:
        if not self.data_dir.exists():
            logger.info("Creating data directory: %s", self.data_dir)
            self.data_dir.mkdir(parents=True, exist_ok=True)

    def _save(self) -> None:
        payload = [movie.model_dump(by_alias=True) for movie in self._favorites]
        try:
            self._ensure_data_dir()
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Error saving favorites: %s", e)
            raise FavoritesStorageError() from e

        logger.info("Saved %s favorites to file", len(self._favorites))

    # ---- queries ----

    def find_all(self) -> List[FavoriteMovie]:
        return list(self._favorites)

    def find_by_imdb_id(self, imdb_id: str) -> Optional[FavoriteMovie]:
        key = imdb_id.lower()
        for movie in self._favorites:
            if movie.imdb_id.lower() == key:
                return movie
        return None

    def exists(self, imdb_id: str) -> bool:
        return self.find_by_imdb_id(imdb_id) is not None

    def count(self) -> int:
        return len(self._favorites)

    def find_paginated(self, page: int, page_size: int) -> FavoritesPage:
        page = max(1, page)
        page_size = max(1, page_size)

        start = (page - 1) * page_size
        items = self._favorites[start:start + page_size]
        total = len(self._favorites)

        return FavoritesPage(
            items=items,
            total=total,
            total_pages=math.ceil(total / page_size),
        )

    # ---- mutations ----

    def add(self, movie: MovieIn) -> FavoriteMovie:
        favorite = _to_favorite(movie)
        with self._lock:
            self._favorites.append(favorite)
            self._save()
        return favorite

    def add_if_absent(self, movie: MovieIn) -> bool:
        """Check and append under one lock; False when the imdbID is already stored."""
        with self._lock:
            if self.exists(movie.imdb_id):
                return False
            self._favorites.append(_to_favorite(movie))
            self._save()
        return True

    def remove(self, imdb_id: str) -> bool:
        key = imdb_id.lower()
        with self._lock:
            kept = [movie for movie in self._favorites if movie.imdb_id.lower() != key]
            if len(kept) == len(self._favorites):
                return False
            self._favorites = kept
            self._save()
        return True

    def clear(self) -> None:
        with self._lock:
            self._favorites = []
            self._save()
