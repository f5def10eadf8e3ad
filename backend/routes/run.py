"""Run lifecycle endpoints: start, advance, read, choose."""

from fastapi import APIRouter, Depends

from backend.host import EngineHost

from .deps import get_host
from .models import StartNewBody, SwitchBody

router = APIRouter()


@router.post("/run", status_code=201)
def start_new(body: StartNewBody, host: EngineHost = Depends(get_host)):
    """Start a new run in the given locale, replacing any current run."""
    host.start_new(body.locale)
    return {"ok": True}


@router.post("/run/next")
def next_run(host: EngineHost = Depends(get_host)):
    """Advance the run. `more` is false once the script is exhausted."""
    return {"more": host.next_run()}


@router.get("/run/current")
def current_run(host: EngineHost = Depends(get_host)):
    """The current action, or null when the run is exhausted or not started."""
    action = host.current_run()
    if action is None:
        return None
    return action.to_wire()


@router.post("/run/switch")
def switch(body: SwitchBody, host: EngineHost = Depends(get_host)):
    """Take a switch at the current step."""
    host.switch(body.i)
    return {"ok": True}


@router.get("/run/history")
def history(host: EngineHost = Depends(get_host)):
    """Steps the run has left, oldest first."""
    return host.history()
