# app/db/engine.py

from functools import lru_cache

from app.config import get_settings
from app.db.favorites import FavoritesRepository


@lru_cache
def get_repository() -> FavoritesRepository:
    # one shared store per process; the file is read once on first use
    repository = FavoritesRepository(get_settings().favorites_path)
    repository.load()
    return repository
