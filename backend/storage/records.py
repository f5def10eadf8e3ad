"""Saved runs ("records"), one JSON file per record.

Layout: records/<project-slug>/<index>.json. Indices are the file stems and
new records take max + 1, so deleting a record never renumbers the others.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from gal_runtime import RunRecord

from .core import records_dir

logger = logging.getLogger(__name__)


def _record_paths(project_title: str) -> dict[int, Path]:
    root = records_dir(project_title)
    if not root.is_dir():
        return {}
    paths: dict[int, Path] = {}
    for path in root.glob("*.json"):
        if path.stem.isdigit():
            paths[int(path.stem)] = path
    return dict(sorted(paths.items()))


def list_records(project_title: str) -> list[tuple[int, RunRecord]]:
    """All readable records for a project, by index. Unreadable files are skipped."""
    results = []
    for index, path in _record_paths(project_title).items():
        try:
            record = RunRecord.model_validate_json(path.read_text())
        except ValidationError as e:
            logger.warning("Skipping unreadable record %s: %s", path, e)
            continue
        results.append((index, record))
    return results


def get_record(project_title: str, index: int) -> RunRecord | None:
    path = records_dir(project_title) / f"{index}.json"
    if not path.is_file():
        return None
    try:
        return RunRecord.model_validate_json(path.read_text())
    except ValidationError as e:
        logger.warning("Unreadable record %s: %s", path, e)
        return None


def save_record(project_title: str, record: RunRecord) -> int:
    """Persist a record and return its index."""
    root = records_dir(project_title)
    root.mkdir(parents=True, exist_ok=True)
    index = max(_record_paths(project_title), default=-1) + 1
    (root / f"{index}.json").write_text(record.model_dump_json(indent=2))
    return index


def delete_record(project_title: str, index: int) -> bool:
    path = records_dir(project_title) / f"{index}.json"
    if not path.is_file():
        return False
    path.unlink()
    return True
