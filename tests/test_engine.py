"""Tests for the run engine state machine."""

import pytest
from pydantic import ValidationError

from gal_runtime import (
    AssetNotFound,
    InvalidRecord,
    InvalidSwitch,
    NoActiveRun,
    NotLoaded,
    RunEngine,
    RunRecord,
    UnknownLocale,
    UnsupportedLocale,
    build_project,
    load_project,
)
from gal_runtime.models import HistoryEntry


@pytest.fixture
def engine(project_dir) -> RunEngine:
    return RunEngine(load_project(project_dir, base_url="/assets"))


def _linear_engine(tmp_path, lines: list[str]) -> RunEngine:
    data = {
        "title": "Linear",
        "locales": {"en": {}},
        "script": {"en": [{"line": line} for line in lines]},
    }
    return RunEngine(build_project(data, tmp_path))


# ── Not loaded ───────────────────────────────────────────


def test_operations_before_load_raise_not_loaded():
    engine = RunEngine()
    assert not engine.loaded
    for call in (
        engine.info,
        lambda: engine.choose_locale(["en"]),
        lambda: engine.locale_native_name("en"),
        lambda: engine.start_new("en"),
        engine.next_run,
        engine.current_run,
        lambda: engine.switch(0),
        engine.history,
        engine.snapshot,
    ):
        with pytest.raises(NotLoaded):
            call()


def test_unload_discards_run(engine):
    engine.start_new("en")
    engine.unload()
    assert engine.run is None
    with pytest.raises(NotLoaded):
        engine.current_run()


# ── Info and locales ─────────────────────────────────────


def test_info(engine):
    info = engine.info()
    assert info.title == "Sample Story"
    assert info.author == "Test Author"


def test_choose_locale(engine):
    assert engine.choose_locale(["fr", "ja"]) == "ja"
    assert engine.choose_locale(["fr"]) is None


def test_locale_native_name(engine):
    assert engine.locale_native_name("en") == "English"
    assert engine.locale_native_name("ja") == "日本語"
    with pytest.raises(UnknownLocale):
        engine.locale_native_name("fr")


# ── start_new / current_run ──────────────────────────────


def test_no_run_yet(engine):
    assert engine.current_run() is None
    with pytest.raises(NoActiveRun):
        engine.next_run()
    with pytest.raises(NoActiveRun):
        engine.switch(0)
    with pytest.raises(NoActiveRun):
        engine.history()
    with pytest.raises(NoActiveRun):
        engine.snapshot()


def test_start_new_serves_step_zero(engine):
    engine.start_new("en")
    action = engine.current_run()
    assert action.line == "Welcome."
    assert action.character is None
    assert action.switches == []
    assert action.bg == "/assets/images/hall.png"
    assert action.bgm == "/assets/audio/main.ogg"


def test_start_new_other_locale(engine):
    engine.start_new("ja")
    assert engine.current_run().line == "ようこそ。"


def test_start_new_unsupported_locale(engine):
    with pytest.raises(UnsupportedLocale):
        engine.start_new("fr")
    assert engine.run is None


def test_start_new_unsupported_keeps_existing_run(engine):
    engine.start_new("en")
    engine.next_run()
    with pytest.raises(UnsupportedLocale):
        engine.start_new("fr")
    assert engine.run.cursor == 1


def test_start_new_replaces_run(engine):
    engine.start_new("en")
    engine.next_run()
    engine.next_run()
    engine.start_new("en")
    assert engine.run.cursor == 0
    assert engine.history() == []
    assert engine.current_run().line == "Welcome."


def test_current_run_is_idempotent(engine):
    engine.start_new("en")
    engine.next_run()
    assert engine.current_run() == engine.current_run()
    assert engine.run.cursor == 1


def test_missing_asset_surfaces(project_data, tmp_path):
    project_data["script"]["en"][0]["background"] = "bg.nope"
    engine = RunEngine(build_project(project_data, tmp_path))
    engine.start_new("en")
    with pytest.raises(AssetNotFound):
        engine.current_run()


def test_no_asset_stays_none(engine):
    engine.start_new("en")
    engine.next_run()
    action = engine.current_run()
    assert action.character == "Alice"
    assert action.bg is None
    assert action.bgm is None


# ── next_run ─────────────────────────────────────────────


def test_linear_script_visits_every_step_once(tmp_path):
    engine = _linear_engine(tmp_path, ["one", "two", "three"])
    engine.start_new("en")
    seen = [engine.current_run().line]
    while engine.next_run():
        seen.append(engine.current_run().line)
    assert seen == ["one", "two", "three"]
    assert engine.current_run() is None


def test_next_run_false_exactly_at_end(tmp_path):
    engine = _linear_engine(tmp_path, ["one", "two"])
    engine.start_new("en")
    assert engine.next_run() is True
    assert engine.current_run().line == "two"
    assert engine.next_run() is False
    assert engine.current_run() is None


def test_next_run_after_exhaustion_stays_put(tmp_path):
    engine = _linear_engine(tmp_path, ["only"])
    engine.start_new("en")
    assert engine.next_run() is False
    assert engine.next_run() is False
    assert engine.run.cursor == 1
    assert [h.index for h in engine.history()] == [0]


def test_empty_script_is_exhausted_immediately(tmp_path):
    engine = _linear_engine(tmp_path, [])
    engine.start_new("en")
    assert engine.current_run() is None
    assert engine.next_run() is False


def test_next_run_falls_through_branch_point(engine):
    engine.start_new("en")
    engine.next_run()
    assert engine.current_run().switches
    assert engine.next_run() is True
    assert engine.current_run().line == "The right path."


# ── switch ───────────────────────────────────────────────


def test_switch_scenario(engine):
    engine.start_new("en")
    engine.next_run()
    action = engine.current_run()
    assert [(s.text, s.enabled) for s in action.switches] == [
        ("Go left", True),
        ("Go right", False),
    ]

    with pytest.raises(InvalidSwitch):
        engine.switch(1)
    assert engine.run.cursor == 1

    engine.switch(0)
    assert engine.run.cursor == 3
    assert engine.run.last_switch == 0
    assert engine.current_run().line == "The left path."
    assert engine.current_run().bg == "/assets/images/garden.png"


@pytest.mark.parametrize("i", [-1, 2, 99])
def test_switch_out_of_range(engine, i):
    engine.start_new("en")
    engine.next_run()
    with pytest.raises(InvalidSwitch):
        engine.switch(i)
    assert engine.run.cursor == 1
    assert engine.run.last_switch is None
    assert [h.index for h in engine.history()] == [0]


def test_switch_without_switches(engine):
    engine.start_new("en")
    with pytest.raises(InvalidSwitch, match="no switches"):
        engine.switch(0)
    assert engine.run.cursor == 0


def test_switch_on_exhausted_run(tmp_path):
    engine = _linear_engine(tmp_path, ["only"])
    engine.start_new("en")
    engine.next_run()
    with pytest.raises(InvalidSwitch):
        engine.switch(0)


def test_switch_then_continue(engine):
    engine.start_new("en")
    engine.next_run()
    engine.switch(0)
    assert engine.next_run() is True
    assert engine.current_run().line == "The end."
    assert engine.next_run() is False


# ── History ──────────────────────────────────────────────


def test_history_records_steps_left(engine):
    engine.start_new("en")
    engine.next_run()
    engine.switch(0)
    engine.next_run()
    assert engine.history() == [
        HistoryEntry(index=0),
        HistoryEntry(index=1, switch=0),
        HistoryEntry(index=3),
    ]


def test_history_is_a_copy(engine):
    engine.start_new("en")
    engine.next_run()
    engine.history().clear()
    assert len(engine.history()) == 1


def test_history_entries_are_read_only(engine):
    engine.start_new("en")
    engine.next_run()
    engine.switch(0)
    with pytest.raises(ValidationError):
        engine.history()[-1].switch = 1
    with pytest.raises(ValidationError):
        engine.snapshot().history[-1].index = 2
    assert engine.history()[-1] == HistoryEntry(index=1, switch=0)


# ── Snapshot / restore ───────────────────────────────────


def test_snapshot_restore_roundtrip(engine):
    engine.start_new("en")
    engine.next_run()
    engine.switch(0)
    record = engine.snapshot()
    expected = engine.current_run()

    engine.start_new("ja")
    engine.restore(record)
    assert engine.current_run() == expected
    assert engine.run.last_switch == 0
    assert engine.history() == record.history


def test_restore_exhausted_record(engine):
    engine.restore(RunRecord(locale="en", cursor=5))
    assert engine.current_run() is None
    assert engine.next_run() is False


def test_restore_unsupported_locale(engine):
    with pytest.raises(UnsupportedLocale):
        engine.restore(RunRecord(locale="fr", cursor=0))


def test_restore_rejects_cursor_past_end(engine):
    engine.start_new("en")
    engine.next_run()
    with pytest.raises(InvalidRecord):
        engine.restore(RunRecord(locale="en", cursor=6))
    assert engine.run.cursor == 1
    assert engine.run.locale == "en"


def test_restore_rejects_bad_history(engine):
    record = RunRecord(locale="ja", cursor=1, history=[HistoryEntry(index=4)])
    with pytest.raises(InvalidRecord):
        engine.restore(record)
    assert engine.run is None


@pytest.mark.parametrize("history", [
    [HistoryEntry(index=0, switch=0)],  # step 0 offers no switches
    [HistoryEntry(index=1, switch=2)],  # out of range
    [HistoryEntry(index=1, switch=1)],  # disabled
])
def test_restore_rejects_bad_history_switch(engine, history):
    record = RunRecord(locale="en", cursor=3, last_switch=history[-1].switch, history=history)
    with pytest.raises(InvalidRecord):
        engine.restore(record)
    assert engine.run is None


def test_restore_rejects_last_switch_without_history(engine):
    engine.start_new("en")
    with pytest.raises(InvalidRecord):
        engine.restore(RunRecord(locale="en", cursor=0, last_switch=42))
    assert engine.run.last_switch is None
    assert engine.run.locale == "en"


def test_restore_rejects_mismatched_last_switch(engine):
    history = [HistoryEntry(index=0), HistoryEntry(index=1, switch=0)]
    with pytest.raises(InvalidRecord):
        engine.restore(RunRecord(locale="en", cursor=3, history=history))


def test_restore_after_switch_and_next(engine):
    engine.start_new("en")
    engine.next_run()
    engine.switch(0)
    engine.next_run()
    record = engine.snapshot()

    engine.start_new("en")
    engine.restore(record)
    assert engine.run.last_switch == 0
    assert engine.current_run().line == "The end."


def test_load_replaces_project_and_run(engine, tmp_path):
    engine.start_new("en")
    engine.load(_linear_engine(tmp_path, ["x"]).project)
    assert engine.run is None
    assert engine.info().title == "Linear"
