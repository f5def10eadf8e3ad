"""Project loader.

A project is a directory holding a project.json and its asset files:

    {project}/
      project.json     <- title, author, locales, asset manifest, script
      assets/          <- files referenced by the asset manifest

project.json:

    {
      "title": "...", "author": "...",
      "locales": {"en": {"native_name": "English"}, "ja": {}},
      "asset_root": "assets",                 (optional, default "assets")
      "assets": {"bg.hall": "images/hall.png"},
      "script": {"en": [{"line": "...", "switches": [...]}, ...], "ja": [...]}
    }

Every declared locale must have a script, and every scripted locale must be
declared. Switch targets are validated by the ScriptStore.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .assets import AssetResolver
from .errors import ProjectLoadError
from .locale import LocaleCatalog
from .models import Locale, LocaleEntry, ProjectInfo, Step
from .script import ScriptStore

logger = logging.getLogger(__name__)

PROJECT_FILE = "project.json"


class ProjectFile(BaseModel):
    """On-disk shape of project.json."""

    title: str
    author: str = ""
    locales: dict[Locale, LocaleEntry]
    asset_root: str = "assets"
    assets: dict[str, str] = Field(default_factory=dict)
    script: dict[Locale, list[Step]]


@dataclass(frozen=True)
class Project:
    """Everything the engine needs from a loaded project."""

    info: ProjectInfo
    catalog: LocaleCatalog
    script: ScriptStore
    assets: AssetResolver
    path: Path | None = None


def build_project(
    data: dict, root: Path, base_url: str | None = None, path: Path | None = None
) -> Project:
    """Validate raw project data and assemble a Project.

    `root` is the project directory; asset paths are resolved below
    root / asset_root.
    """
    try:
        parsed = ProjectFile.model_validate(data)
    except ValidationError as e:
        raise ProjectLoadError(f"Invalid project data: {e}") from e

    undeclared = set(parsed.script) - set(parsed.locales)
    if undeclared:
        raise ProjectLoadError(f"Script locales not declared: {sorted(undeclared)}")
    unscripted = set(parsed.locales) - set(parsed.script)
    if unscripted:
        raise ProjectLoadError(f"Declared locales without a script: {sorted(unscripted)}")

    return Project(
        info=ProjectInfo(title=parsed.title, author=parsed.author),
        catalog=LocaleCatalog(parsed.locales),
        script=ScriptStore(parsed.script),
        assets=AssetResolver(root / parsed.asset_root, parsed.assets, base_url),
        path=path,
    )


def load_project(project_dir: Path, base_url: str | None = None) -> Project:
    """Read {project_dir}/project.json into a Project."""
    path = project_dir / PROJECT_FILE
    if not path.is_file():
        raise ProjectLoadError(f"No {PROJECT_FILE} in {project_dir}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProjectLoadError(f"{path} is not valid JSON: {e}") from e
    except (UnicodeDecodeError, OSError) as e:
        raise ProjectLoadError(f"Cannot read {path}: {e}") from e

    project = build_project(data, project_dir, base_url=base_url, path=project_dir)
    logger.info(
        "loaded project %r from %s (locales=%s)",
        project.info.title, project_dir, ",".join(project.catalog.locales),
    )
    return project
