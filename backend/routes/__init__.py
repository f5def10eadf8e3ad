"""FastAPI API endpoints under /api.

Endpoint groups: settings (health, user settings), locales (info, locale
negotiation), run (start, next, current, switch, history), records (save,
list, load, delete saved runs). Engine endpoints are sync handlers: they run
on the threadpool and reach the engine through the app's EngineHost, which
serializes them.
"""

from fastapi import APIRouter

from .locales import router as locales_router
from .records import router as records_router
from .run import router as run_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(locales_router)
router.include_router(run_router)
router.include_router(records_router)
