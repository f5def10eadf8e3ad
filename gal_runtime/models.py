"""Core domain models.

The Script Store, the Run Engine and both boundary adapters operate on these
types. Pydantic is used for validation and serialisation at every data
boundary: project files are validated into Step/ScriptSwitch on load, and
Action/RunRecord are what leave the engine.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

Locale = str


class ProjectInfo(BaseModel):
    """Title and author of the loaded project."""

    title: str
    author: str = ""


class LocaleEntry(BaseModel):
    """A locale declared by the project."""

    native_name: str | None = None


class ScriptSwitch(BaseModel):
    """A branch option as written in the script, including its jump target."""

    model_config = ConfigDict(frozen=True)

    text: str
    enabled: bool = True
    target: int | None = None  # step index; required when enabled


class Step(BaseModel):
    """One narrative unit, addressed by (locale, index)."""

    model_config = ConfigDict(frozen=True)

    line: str
    character: str | None = None  # None means narrator
    switches: tuple[ScriptSwitch, ...] = ()
    background: str | None = None  # asset id
    music: str | None = None  # asset id


class Switch(BaseModel):
    """A branch option as the presentation layer sees it."""

    text: str
    enabled: bool


class Action(BaseModel):
    """The renderable projection of a Step, with assets already resolved."""

    line: str
    character: str | None = None
    switches: list[Switch] = Field(default_factory=list)
    bg: str | None = None
    bgm: str | None = None

    def to_wire(self) -> dict:
        """Dump for the boundary: bg/bgm are omitted when there is no asset."""
        data = self.model_dump()
        for key in ("bg", "bgm"):
            if data[key] is None:
                del data[key]
        return data


class HistoryEntry(BaseModel):
    """A step the run has left, and the switch taken to leave it (if any)."""

    model_config = ConfigDict(frozen=True)

    index: int
    switch: int | None = None


class RunRecord(BaseModel):
    """A saved snapshot of a run."""

    locale: Locale
    cursor: int = Field(ge=0)
    last_switch: int | None = None
    history: list[HistoryEntry] = Field(default_factory=list)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
