from app.config import get_settings
from app.db.favorites import FavoritesRepository


def main():
    settings = get_settings()
    repository = FavoritesRepository(settings.favorites_path)
    repository.clear()
    print(f"Favorites reset: {settings.favorites_path}")


if __name__ == "__main__":
    main()
