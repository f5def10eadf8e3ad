"""Run-state engine for branching, multi-locale narrative scripts."""

from .assets import AssetResolver
from .engine import Run, RunEngine
from .errors import (
    AssetNotFound,
    EngineError,
    InvalidRecord,
    InvalidSwitch,
    NoActiveRun,
    NotLoaded,
    ProjectLoadError,
    UnknownLocale,
    UnsupportedLocale,
)
from .locale import LocaleCatalog
from .models import (
    Action,
    HistoryEntry,
    Locale,
    ProjectInfo,
    RunRecord,
    ScriptSwitch,
    Step,
    Switch,
)
from .project import Project, build_project, load_project
from .script import ScriptStore

__all__ = [
    "Action",
    "AssetNotFound",
    "AssetResolver",
    "EngineError",
    "HistoryEntry",
    "InvalidRecord",
    "InvalidSwitch",
    "Locale",
    "LocaleCatalog",
    "NoActiveRun",
    "NotLoaded",
    "Project",
    "ProjectInfo",
    "ProjectLoadError",
    "Run",
    "RunEngine",
    "RunRecord",
    "ScriptStore",
    "ScriptSwitch",
    "Step",
    "Switch",
    "UnknownLocale",
    "UnsupportedLocale",
    "build_project",
    "load_project",
]
