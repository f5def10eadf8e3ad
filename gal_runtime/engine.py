"""Run engine: the run-state core behind the boundary adapters.

Lifecycle:

    unloaded --load()--> no run --start_new()--> running
                                     ^                |
                                     +-- start_new() -+   (replaces the run)

Cursor protocol: the cursor always points at the step current_run() serves.

    start_new("en")   cursor 0     current_run() -> step 0
    next_run()        cursor 1     returns True  (step 1 exists)
    ...
    next_run()        cursor N     returns False (exhausted)
    current_run()                  -> None

Once exhausted, next_run() keeps returning False without moving. switch(i)
jumps the cursor to the target declared by option i of the current step.

Every operation validates before it mutates, so a call that raises leaves
the run untouched. The engine is not thread-safe; the boundary serializes
calls (see backend.host).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .errors import (
    InvalidRecord,
    InvalidSwitch,
    NoActiveRun,
    NotLoaded,
    UnsupportedLocale,
)
from .models import (
    Action,
    HistoryEntry,
    Locale,
    ProjectInfo,
    RunRecord,
    Step,
    Switch,
)
from .project import Project

logger = logging.getLogger(__name__)


@dataclass
class Run:
    """The single mutable session: locale binding plus narrative position."""

    locale: Locale
    cursor: int = 0
    last_switch: int | None = None
    history: list[HistoryEntry] = field(default_factory=list)


class RunEngine:
    def __init__(self, project: Project | None = None) -> None:
        self._project: Project | None = None
        self._run: Run | None = None
        if project is not None:
            self.load(project)

    # ------------------------------------------------------------------
    # Project lifecycle
    # ------------------------------------------------------------------

    def load(self, project: Project) -> None:
        """Load a project, discarding any run of the previous one."""
        self._project = project
        self._run = None
        logger.debug("engine loaded project %r", project.info.title)

    def unload(self) -> None:
        self._project = None
        self._run = None

    @property
    def loaded(self) -> bool:
        return self._project is not None

    @property
    def project(self) -> Project:
        if self._project is None:
            raise NotLoaded("No project is loaded")
        return self._project

    @property
    def run(self) -> Run | None:
        return self._run

    def _active_run(self) -> Run:
        if self._project is None:
            raise NotLoaded("No project is loaded")
        if self._run is None:
            raise NoActiveRun("No run is active; call start_new() first")
        return self._run

    # ------------------------------------------------------------------
    # Info and locales
    # ------------------------------------------------------------------

    def info(self) -> ProjectInfo:
        return self.project.info

    def choose_locale(self, requested: Iterable[Locale]) -> Locale | None:
        return self.project.catalog.choose_locale(requested)

    def locale_native_name(self, loc: Locale) -> str:
        return self.project.catalog.locale_native_name(loc)

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def start_new(self, locale: Locale) -> None:
        """Replace any existing run with a fresh one at step 0 of `locale`."""
        script = self.project.script
        if not script.has_locale(locale):
            raise UnsupportedLocale(f"No script for locale {locale!r}")
        self._run = Run(locale=locale)
        logger.debug("start_new locale=%s steps=%d", locale, script.step_count(locale))

    def next_run(self) -> bool:
        """Advance past the current step. Returns False once the run is exhausted."""
        run = self._active_run()
        count = self.project.script.step_count(run.locale)
        if run.cursor >= count:
            return False
        run.history.append(HistoryEntry(index=run.cursor))
        run.cursor += 1
        if run.cursor >= count:
            logger.debug("run exhausted locale=%s after %d steps", run.locale, count)
            return False
        return True

    def current_run(self) -> Action | None:
        """Materialize the step under the cursor, or None if there is none."""
        project = self.project
        if self._run is None:
            return None
        step = project.script.step_at(self._run.locale, self._run.cursor)
        if step is None:
            return None
        return self._materialize(step)

    def _materialize(self, step: Step) -> Action:
        resolve = self.project.assets.resolve
        return Action(
            line=step.line,
            character=step.character,
            switches=[Switch(text=s.text, enabled=s.enabled) for s in step.switches],
            bg=resolve(step.background) if step.background is not None else None,
            bgm=resolve(step.music) if step.music is not None else None,
        )

    def switch(self, i: int) -> None:
        """Take option `i` of the current step and jump to its target."""
        run = self._active_run()
        step = self.project.script.step_at(run.locale, run.cursor)
        if step is None:
            raise InvalidSwitch("The run is exhausted; there is nothing to choose")
        if not step.switches:
            raise InvalidSwitch(f"Step {run.cursor} offers no switches")
        if not 0 <= i < len(step.switches):
            raise InvalidSwitch(
                f"Switch {i} out of range; step {run.cursor} has {len(step.switches)}"
            )
        chosen = step.switches[i]
        if not chosen.enabled:
            raise InvalidSwitch(f"Switch {i} ({chosen.text!r}) is disabled")

        run.history.append(HistoryEntry(index=run.cursor, switch=i))
        run.last_switch = i
        run.cursor = chosen.target
        logger.debug("switch %d at step %d -> step %d", i, run.history[-1].index, run.cursor)

    def history(self) -> list[HistoryEntry]:
        """Steps the run has left so far, oldest first."""
        return list(self._active_run().history)

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def snapshot(self) -> RunRecord:
        run = self._active_run()
        return RunRecord(
            locale=run.locale,
            cursor=run.cursor,
            last_switch=run.last_switch,
            history=list(run.history),
        )

    def restore(self, record: RunRecord) -> None:
        """Replace the run with a saved one, after checking it fits the script."""
        script = self.project.script
        if not script.has_locale(record.locale):
            raise UnsupportedLocale(f"No script for locale {record.locale!r}")
        count = script.step_count(record.locale)
        if record.cursor > count:
            raise InvalidRecord(f"Cursor {record.cursor} is past the end ({count} steps)")

        taken: int | None = None
        for entry in record.history:
            step = script.step_at(record.locale, entry.index)
            if step is None:
                raise InvalidRecord(f"History index {entry.index} is outside the script")
            if entry.switch is None:
                continue
            if not 0 <= entry.switch < len(step.switches):
                raise InvalidRecord(
                    f"History switch {entry.switch} at step {entry.index} is out of range"
                )
            if not step.switches[entry.switch].enabled:
                raise InvalidRecord(
                    f"History switch {entry.switch} at step {entry.index} is disabled"
                )
            taken = entry.switch
        # last_switch is the most recent switch in the history
        if record.last_switch != taken:
            raise InvalidRecord(
                f"Last switch {record.last_switch} does not match the history ({taken})"
            )

        self._run = Run(
            locale=record.locale,
            cursor=record.cursor,
            last_switch=record.last_switch,
            history=list(record.history),
        )
        logger.debug("restored run locale=%s cursor=%d", record.locale, record.cursor)
