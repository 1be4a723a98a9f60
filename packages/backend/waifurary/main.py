import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from .api import folders, metadata, tags
from .core import config
from .core.config import AppPaths


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(paths: AppPaths | None = None) -> FastAPI:
    """Build the API. Without ``paths`` the data root is resolved per request."""
    app = FastAPI(title="Waifurary API", version="0.1.0")
    app.state.paths = paths

    # GZip compression for JSON responses (tag indexes get large)
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # CORS: allow the desktop shell's dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(folders.router, prefix="/folders", tags=["folders"])
    app.include_router(metadata.router, prefix="/metadata", tags=["metadata"])
    app.include_router(tags.router, prefix="/tags", tags=["tags"])
    return app


app = create_app()


def run() -> None:
    import uvicorn

    configure_logging()
    uvicorn.run("waifurary.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
