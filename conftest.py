import copy
import json
import shutil
from pathlib import Path

import pytest

from backend import storage

TEST_DATA_DIR = Path("data-tests")

ASSET_FILES = {
    "bg.hall": "images/hall.png",
    "bg.garden": "images/garden.png",
    "bgm.main": "audio/main.ogg",
}

# Five English steps: step 1 is a branch point (left -> 3, right disabled).
SAMPLE_PROJECT = {
    "title": "Sample Story",
    "author": "Test Author",
    "locales": {"en": {"native_name": "English"}, "ja": {}},
    "assets": ASSET_FILES,
    "script": {
        "en": [
            {"line": "Welcome.", "background": "bg.hall", "music": "bgm.main"},
            {
                "line": "Where to?",
                "character": "Alice",
                "switches": [
                    {"text": "Go left", "enabled": True, "target": 3},
                    {"text": "Go right", "enabled": False},
                ],
            },
            {"line": "The right path.", "character": "Alice"},
            {"line": "The left path.", "background": "bg.garden"},
            {"line": "The end."},
        ],
        "ja": [
            {"line": "ようこそ。"},
            {"line": "おわり。"},
        ],
    },
}


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-init data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    storage.init_storage(TEST_DATA_DIR)
    yield
    # leave data-tests around after tests for inspection; CI can ignore it


@pytest.fixture
def project_data() -> dict:
    return copy.deepcopy(SAMPLE_PROJECT)


@pytest.fixture
def project_dir(tmp_path, project_data) -> Path:
    """A project directory holding SAMPLE_PROJECT and empty asset files."""
    root = tmp_path / "project"
    for rel in ASSET_FILES.values():
        path = root / "assets" / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
    (root / "project.json").write_text(json.dumps(project_data, ensure_ascii=False), encoding="utf-8")
    return root
