"""Engine host: the one engine instance a process serves, behind a lock.

The HTTP routes and the MCP tools both reach the engine through an
EngineHost, so start_new / next_run / switch / restore never interleave even
when FastAPI runs sync work on its threadpool. Each method is a thin
pass-through: the engine keeps the state machine, the host only serializes.
"""

from __future__ import annotations

import threading
from pathlib import Path

from backend import storage
from gal_runtime import (
    Action,
    HistoryEntry,
    Locale,
    Project,
    ProjectInfo,
    RunEngine,
    RunRecord,
    load_project,
)


class EngineHost:
    def __init__(self, engine: RunEngine | None = None) -> None:
        self._engine = engine or RunEngine()
        self._lock = threading.Lock()

    @classmethod
    def from_project_dir(cls, project_dir: Path, base_url: str | None = None) -> EngineHost:
        return cls(RunEngine(load_project(project_dir, base_url=base_url)))

    @property
    def project(self) -> Project:
        with self._lock:
            return self._engine.project

    def load(self, project: Project) -> None:
        with self._lock:
            self._engine.load(project)

    def unload(self) -> None:
        with self._lock:
            self._engine.unload()

    def info(self) -> ProjectInfo:
        with self._lock:
            return self._engine.info()

    def locales(self) -> list[tuple[Locale, str]]:
        with self._lock:
            catalog = self._engine.project.catalog
            return [(loc, catalog.locale_native_name(loc)) for loc in catalog.locales]

    def choose_locale(self, requested: list[Locale]) -> Locale | None:
        with self._lock:
            return self._engine.choose_locale(requested)

    def locale_native_name(self, loc: Locale) -> str:
        with self._lock:
            return self._engine.locale_native_name(loc)

    def start_new(self, locale: Locale) -> None:
        with self._lock:
            self._engine.start_new(locale)

    def next_run(self) -> bool:
        with self._lock:
            return self._engine.next_run()

    def current_run(self) -> Action | None:
        with self._lock:
            return self._engine.current_run()

    def switch(self, i: int) -> None:
        with self._lock:
            self._engine.switch(i)

    def history(self) -> list[HistoryEntry]:
        with self._lock:
            return self._engine.history()

    def snapshot(self) -> RunRecord:
        with self._lock:
            return self._engine.snapshot()

    def restore(self, record: RunRecord) -> None:
        with self._lock:
            self._engine.restore(record)

    def save_snapshot(self) -> tuple[int, RunRecord]:
        """Snapshot the run and store it as a new record. Returns (index, record)."""
        with self._lock:
            record = self._engine.snapshot()
            index = storage.save_record(self._engine.project.info.title, record)
            return index, record
