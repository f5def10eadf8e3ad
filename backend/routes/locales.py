"""Project info and locale negotiation endpoints."""

from fastapi import APIRouter, Depends

from backend.host import EngineHost

from .deps import get_host
from .models import ChooseLocaleBody

router = APIRouter()


@router.get("/info")
def info(host: EngineHost = Depends(get_host)):
    """Title and author of the loaded project."""
    return host.info()


@router.get("/locales")
def list_locales(host: EngineHost = Depends(get_host)):
    """Supported locales with their native names, in project order."""
    return [{"locale": loc, "name": name} for loc, name in host.locales()]


@router.post("/choose-locale")
def choose_locale(body: ChooseLocaleBody, host: EngineHost = Depends(get_host)):
    """Pick the first of the requested locales the project supports."""
    return {"locale": host.choose_locale(body.locales)}


@router.get("/locales/{loc}/native-name")
def locale_native_name(loc: str, host: EngineHost = Depends(get_host)):
    """Human-readable self-name of a supported locale."""
    return {"name": host.locale_native_name(loc)}
