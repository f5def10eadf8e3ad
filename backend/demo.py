"""Create a demo project for development/testing."""

import json
import shutil
from pathlib import Path

DEMO_ASSETS = {
    "bg.gate": "images/gate.png",
    "bg.forest": "images/forest.png",
    "bg.river": "images/river.png",
    "bgm.theme": "audio/theme.ogg",
}

DEMO_PROJECT = {
    "title": "Dragon's Hollow",
    "author": "Demo Studio",
    "locales": {
        "en": {"native_name": "English"},
        "ja": {},
    },
    "assets": DEMO_ASSETS,
    "script": {
        "en": [
            {
                "line": "You stand at the edge of Dragon's Hollow as dusk settles over the pass.",
                "background": "bg.gate",
                "music": "bgm.theme",
            },
            {
                "line": "Which way will you go?",
                "character": "Elena",
                "switches": [
                    {"text": "Go left", "enabled": True, "target": 2},
                    {"text": "Go right", "enabled": False},
                    {"text": "Follow the river", "enabled": True, "target": 3},
                ],
            },
            {
                "line": "The forest closes in around you.",
                "background": "bg.forest",
            },
            {
                "line": "The river hums a cold, old song.",
                "background": "bg.river",
            },
        ],
        "ja": [
            {
                "line": "夕暮れの峠、ドラゴンズ・ホロウの入り口に立つ。",
                "background": "bg.gate",
                "music": "bgm.theme",
            },
            {
                "line": "どちらへ進む？",
                "character": "エレナ",
                "switches": [
                    {"text": "左へ", "enabled": True, "target": 2},
                    {"text": "右へ", "enabled": False},
                    {"text": "川に沿って", "enabled": True, "target": 3},
                ],
            },
            {
                "line": "森があなたを包み込む。",
                "background": "bg.forest",
            },
            {
                "line": "川が冷たく古い歌を口ずさむ。",
                "background": "bg.river",
            },
        ],
    },
}


def create_demo_project(project_dir: Path) -> Path:
    """Wipe project_dir and write the demo project with placeholder assets."""
    if project_dir.exists():
        shutil.rmtree(project_dir)
    asset_root = project_dir / "assets"
    for rel in DEMO_ASSETS.values():
        path = asset_root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
    (project_dir / "project.json").write_text(
        json.dumps(DEMO_PROJECT, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    return project_dir
