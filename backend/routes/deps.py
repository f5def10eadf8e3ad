"""Request dependencies shared by the routers."""

from fastapi import Request

from backend.host import EngineHost


def get_host(request: Request) -> EngineHost:
    """The app's engine host, set by create_app()."""
    return request.app.state.host
