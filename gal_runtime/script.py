"""Script store: the parsed narrative, an ordered list of steps per locale.

Read-only after construction. Indices are dense by construction since each
locale's steps are a plain list; branch targets are checked once up front so
the engine can jump without re-validating.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from .errors import ProjectLoadError
from .models import Locale, Step


class ScriptStore:
    def __init__(self, scripts: Mapping[Locale, Sequence[Step]]) -> None:
        self._scripts: dict[Locale, tuple[Step, ...]] = {
            loc: tuple(steps) for loc, steps in scripts.items()
        }
        self._check_targets()

    def _check_targets(self) -> None:
        for loc, steps in self._scripts.items():
            count = len(steps)
            for index, step in enumerate(steps):
                for i, sw in enumerate(step.switches):
                    if sw.target is None:
                        if sw.enabled:
                            raise ProjectLoadError(
                                f"[{loc}] step {index}: enabled switch {i} has no target"
                            )
                        continue
                    if not 0 <= sw.target < count:
                        raise ProjectLoadError(
                            f"[{loc}] step {index}: switch {i} targets {sw.target}, "
                            f"outside 0..{count - 1}"
                        )

    @property
    def locales(self) -> list[Locale]:
        return list(self._scripts)

    def has_locale(self, locale: Locale) -> bool:
        return locale in self._scripts

    def step_count(self, locale: Locale) -> int:
        return len(self._scripts.get(locale, ()))

    def step_at(self, locale: Locale, index: int) -> Step | None:
        steps = self._scripts.get(locale)
        if steps is None or not 0 <= index < len(steps):
            return None
        return steps[index]
