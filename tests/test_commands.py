"""
Tests for REPL commands.
"""
import json

import pytest
from diet_planner.commands import CommandContext, get_registry
from diet_planner.commands.plan_command import PlanCommand
from diet_planner.commands.log_editing import (
    CheckCommand, LogCommand, EatCommand, SkipCommand, AddCommand, ServeCommand, MemoCommand,
)
from diet_planner.commands.recommend_command import PrefsCommand
from diet_planner.commands.analyze_command import AnalyzeCommand
from diet_planner.commands.basic_commands import QuitCommand, StatusCommand
from diet_planner.commands.chart_command import ChartCommand
from diet_planner.data import DietStoreManager
from diet_planner.models import MealSlot, PreferenceTag

TODAY = "2024-03-10"


@pytest.fixture
def ctx(tmp_path):
    return CommandContext(tmp_path / "store.json", tmp_path / "profile.json",
                          chart_file=tmp_path / "chart.jpg", window_size=3, today=TODAY)


def reloaded_store(ctx):
    return DietStoreManager(ctx.store_mgr.filepath).load()


# Registry tests
def test_registry_names_and_aliases():
    """Test commands are found by name and alias."""
    registry = get_registry()
    assert registry.get("plan") is PlanCommand
    assert registry.get("P") is PlanCommand
    assert registry.get("eat") is EatCommand
    assert registry.get("nope") is None
    assert "prefs" in registry.list_commands()


def test_split_date_keywords(ctx):
    """Test leading date tokens resolve against today."""
    command = PlanCommand(ctx)
    assert command._split_date("") == (TODAY, [])
    assert command._split_date("yesterday recipes") == ("2024-03-09", ["recipes"])
    assert command._split_date("2024-01-01") == ("2024-01-01", [])
    assert command._split_date("portions") == (TODAY, ["portions"])


# Plan tests
def test_plan_prints_header(ctx, capsys):
    """Test the plan shows its date and every slot."""
    PlanCommand(ctx).execute("")
    out = capsys.readouterr().out
    assert f"식단 {TODAY}" in out
    for slot in MealSlot:
        assert f"[{slot.label}]" in out


# Log editing tests
def test_log_seeds_and_saves(ctx, capsys):
    """Test viewing a log seeds it and writes the store."""
    LogCommand(ctx).execute(TODAY)
    assert f"기록 {TODAY}" in capsys.readouterr().out
    assert TODAY in reloaded_store(ctx).logs


def test_eat_and_skip_persist(ctx, capsys):
    """Test check commands update numbered items on disk."""
    EatCommand(ctx).execute("1")
    SkipCommand(ctx).execute("2")
    out = capsys.readouterr().out
    assert "eaten:" in out
    assert "not eaten:" in out

    items = reloaded_store(ctx).logs[TODAY].all_items()
    assert items[0].eaten
    assert items[1].not_eaten


def test_eat_unknown_number(ctx, capsys):
    """Test an out-of-range item number is reported."""
    EatCommand(ctx).execute("99")
    assert "No item #99" in capsys.readouterr().out


def test_check_command_needs_apply(ctx):
    """Test the shared check command cannot be used without an action."""
    with pytest.raises(TypeError):
        CheckCommand(ctx)


def test_eat_requires_items(ctx, capsys):
    """Test check commands without items print usage."""
    EatCommand(ctx).execute("")
    assert "Usage: eat" in capsys.readouterr().out


def test_add_manual_item(ctx, capsys):
    """Test added foods are manual and eaten."""
    AddCommand(ctx).execute("lunch 김밥 한 줄")
    assert "김밥 한 줄" in capsys.readouterr().out
    item = reloaded_store(ctx).logs[TODAY].items(MealSlot.LUNCH)[-1]
    assert item.name == "김밥 한 줄"
    assert item.eaten and item.is_manual
    assert item.id.startswith(f"{TODAY}-lunch-manual-")


def test_add_unknown_slot(ctx, capsys):
    """Test a bad slot is reported and nothing is saved."""
    AddCommand(ctx).execute("brunch 토스트")
    capsys.readouterr()
    assert not ctx.store_mgr.filepath.exists()


def test_serve_clamps(ctx, capsys):
    """Test servings are clamped when set."""
    ServeCommand(ctx).execute("1 20")
    assert "x8" in capsys.readouterr().out
    assert reloaded_store(ctx).logs[TODAY].all_items()[0].servings == 8


def test_memo_set_and_clear(ctx, capsys):
    """Test the memo can be saved and cleared."""
    MemoCommand(ctx).execute("입맛 없음")
    assert reloaded_store(ctx).logs[TODAY].memo == "입맛 없음"
    MemoCommand(ctx).execute("clear")
    out = capsys.readouterr().out
    assert "Memo saved." in out
    assert "Memo cleared." in out
    assert reloaded_store(ctx).logs[TODAY].memo == ""


# Preference tests
def test_prefs_toggle(ctx, capsys):
    """Test toggling a tag stores it for that date only."""
    PrefsCommand(ctx).execute("fish")
    assert ": on" in capsys.readouterr().out
    prefs = reloaded_store(ctx).preferences
    assert prefs.for_date(TODAY) == [PreferenceTag.FISH]
    assert prefs.for_date("2024-03-11") == []


def test_prefs_unknown(ctx, capsys):
    """Test unknown tags are reported and nothing is stored."""
    PrefsCommand(ctx).execute("banana")
    assert "Unknown preference: 'banana'" in capsys.readouterr().out
    assert ctx.store_mgr.store.preferences.for_date(TODAY) == []
    assert not ctx.store_mgr.filepath.exists()


def test_prefs_spicy_is_selectable(ctx, capsys):
    """Test the spicy tag toggles on."""
    PrefsCommand(ctx).execute("spicy")
    assert "매운맛: on" in capsys.readouterr().out
    assert reloaded_store(ctx).preferences.for_date(TODAY) == [PreferenceTag.SPICY]


# Analysis and status tests
def test_analyze_without_log(ctx, capsys):
    """Test analysis asks for a log first."""
    AnalyzeCommand(ctx).execute("")
    assert f"No log for {TODAY}" in capsys.readouterr().out


def test_analyze_after_eating(ctx, capsys):
    """Test analysis prints scores once a log exists."""
    EatCommand(ctx).execute("1 2 3")
    AnalyzeCommand(ctx).execute("")
    assert "오늘 점수:" in capsys.readouterr().out


def test_status(ctx, capsys):
    """Test status shows stage, medications and the previous month score."""
    StatusCommand(ctx).execute("")
    out = capsys.readouterr().out
    assert "Previous month score: 70" in out
    assert "Medications: (none)" in out
    assert "✓ Data files loaded cleanly" in out


def test_status_reports_bad_store(tmp_path, capsys):
    """Test load problems are reported without failing."""
    store_file = tmp_path / "store.json"
    store_file.write_text("{not json", encoding="utf-8")
    ctx = CommandContext(store_file, tmp_path / "profile.json", today=TODAY)
    assert ctx.load_errors()
    StatusCommand(ctx).execute("")
    assert "⚠️" in capsys.readouterr().out


def test_profile_drives_status(tmp_path, capsys):
    """Test profile medications reach the status output."""
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({"medications": ["타목시펜"]}), encoding="utf-8")
    ctx = CommandContext(tmp_path / "store.json", profile, today=TODAY)
    StatusCommand(ctx).execute("")
    assert "타목시펜" in capsys.readouterr().out


def test_quit_exits(ctx):
    """Test quit raises SystemExit."""
    with pytest.raises(SystemExit):
        QuitCommand(ctx).execute("")


# Chart tests
def test_chart_without_logs(ctx, capsys):
    """Test charting with nothing logged prints a message."""
    ChartCommand(ctx).execute("noopen")
    assert "No logged days to chart." in capsys.readouterr().out


def test_chart_written(ctx, capsys):
    """Test a chart is written for logged days."""
    MemoCommand(ctx).execute("2024-03-09 병원")
    EatCommand(ctx).execute("1")
    ChartCommand(ctx).execute("3 noopen")
    assert "Chart saved to" in capsys.readouterr().out
    assert ctx.chart_file.exists()
