import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.movies import router as movies_router
from app.config import get_settings
from app.db.engine import get_repository
from app.errors import register_exception_handlers
from app.logging_setup import setup_logging
from app.middleware import log_requests

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # read favorites from disk before serving the first request
    repository = get_repository()
    logger.info("Favorites store ready: %s (%s movies)", repository.file_path, repository.count())
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Movie Search API",
        description="Search movies on OMDb and manage a list of favorites",
        version="0.1.0",
        lifespan=lifespan,
    )

    # registered before CORS so CORSMiddleware is the outer layer
    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(movies_router)

    logger.info("Application created (CORS origins: %s)", settings.cors_origin_list)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info("Starting API server on %s:%s", settings.host, settings.port)

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
