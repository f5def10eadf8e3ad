import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend import storage
from backend.host import EngineHost
from backend.routes import router
from gal_runtime import (
    AssetNotFound,
    EngineError,
    InvalidRecord,
    InvalidSwitch,
    NoActiveRun,
    NotLoaded,
    UnknownLocale,
    UnsupportedLocale,
)

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"
ASSETS_URL = "/assets"

ERROR_STATUS: dict[type[EngineError], int] = {
    UnsupportedLocale: 400,
    InvalidSwitch: 400,
    InvalidRecord: 400,
    UnknownLocale: 404,
    NoActiveRun: 409,
    AssetNotFound: 500,
    NotLoaded: 503,
}


async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
    status = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500
    )
    if status >= 500:
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app(project_dir: Path | None = None, data_dir: Path | None = None) -> FastAPI:
    resolved_data = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved_data)

    resolved_project = project_dir
    if resolved_project is None and os.getenv("PROJECT_DIR"):
        resolved_project = Path(os.environ["PROJECT_DIR"])

    if resolved_project is not None:
        host = EngineHost.from_project_dir(resolved_project, base_url=ASSETS_URL)
    else:
        host = EngineHost()

    app = FastAPI(title="gal-runtime")
    app.state.host = host
    app.add_exception_handler(EngineError, engine_error_handler)
    app.include_router(router, prefix="/api")

    if resolved_project is not None:
        asset_root = host.project.assets.root
        if asset_root.is_dir():
            app.mount(ASSETS_URL, StaticFiles(directory=asset_root), name="assets")

    return app


# Default app instance for uvicorn (uses PROJECT_DIR / DATA_DIR env vars)
app = create_app()
