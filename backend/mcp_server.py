"""FastMCP server exposing the run engine as MCP tools.

Tools:
  - choose_locale(locales)      — first requested locale the project supports
  - locale_native_name(loc)     — self-name of a supported locale
  - info()                      — project title and author
  - start_new(locale)           — start a run, replacing any current one
  - next_run()                  — advance; false once exhausted
  - current_run()               — current action, or null
  - switch(i)                   — take switch i at the current step

The tools go through an EngineHost replaced via set_host() (tests), or
loaded from PROJECT_DIR when run as __main__. Engine errors propagate and
FastMCP reports them as tool errors.

Usage:
    PROJECT_DIR=path/to/project uv run python -m backend.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from backend.host import EngineHost

mcp = FastMCP("gal-runtime")

_host: EngineHost = EngineHost()


def set_host(host: EngineHost) -> None:
    """Replace the active engine host (used in tests)."""
    global _host
    _host = host


def get_host() -> EngineHost:
    """Return the active engine host."""
    return _host


@mcp.tool()
def choose_locale(locales: list[str]) -> str | None:
    """Return the first of the requested locales the project supports, or null."""
    return _host.choose_locale(locales)


@mcp.tool()
def locale_native_name(loc: str) -> str:
    """Return the human-readable native name of a supported locale."""
    return _host.locale_native_name(loc)


@mcp.tool()
def info() -> dict:
    """Return the project's title and author."""
    return _host.info().model_dump()


@mcp.tool()
def start_new(locale: str) -> None:
    """Start a new run in the given locale."""
    _host.start_new(locale)


@mcp.tool()
def next_run() -> bool:
    """Advance the run. Returns false once the script is exhausted."""
    return _host.next_run()


@mcp.tool()
def current_run() -> dict | None:
    """Return the current action, or null when there is none."""
    action = _host.current_run()
    if action is None:
        return None
    return action.to_wire()


@mcp.tool()
def switch(i: int) -> None:
    """Take switch i at the current step."""
    _host.switch(i)


if __name__ == "__main__":
    import os
    from pathlib import Path

    from dotenv import load_dotenv

    load_dotenv()
    set_host(EngineHost.from_project_dir(Path(os.environ["PROJECT_DIR"])))
    mcp.run()
