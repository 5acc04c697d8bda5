# tests/test_commands.py

from __future__ import annotations

from task_mark.cli.bootstrap import load_state
from task_mark.cli.commands import CommandRegistry, registry
from task_mark.connectors.console_connector import run_console_loop


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_add_list_and_archive_flow(state) -> None:
    assert "Added 'Buy milk'" in registry.handle(state, "/add urgent Buy milk | 2 litres")
    assert "new category 'Gym'" in registry.handle(state, "/add new:Gym Leg day")
    assert "to 'Gym'" in registry.handle(state, "/add custom:Gym Arms")
    registry.handle(state, "/add non-urgent Call bank")

    listing = registry.handle(state, "/list")
    assert listing.splitlines()[0] == "[Gym]"
    assert "[Urgent]" in listing

    assert "Selected 'Buy milk': 2 litres" == registry.handle(state, "/select 1")
    assert "Moved 'Buy milk'" in registry.handle(state, "/archive")
    assert [t.title for t in state.archive_tasks] == ["Buy milk"]
    assert "Buy milk - 2 litres" in registry.handle(state, "/archived")


def test_add_rejects_duplicates_and_unknown_customs(state) -> None:
    registry.handle(state, "/add new:Home Fix sink")
    warnings: list[str] = []

    reply = registry.handle(state, "/add new:Home Paint wall", emit=warnings.append)

    assert "already exists" in reply
    assert warnings
    assert "No custom category named 'Work'" in registry.handle(state, "/add custom:Work Report")
    assert registry.handle(state, "/add soon Something").startswith("Usage")
    assert len(state.tasks) == 1


def test_archive_with_bad_row_is_noop(state) -> None:
    registry.handle(state, "/add urgent A")
    assert "Nothing to archive" in registry.handle(state, "/archive 9")
    assert "Nothing to archive" in registry.handle(state, "/archive x")
    assert len(state.tasks) == 1


def test_cats_and_save(state) -> None:
    registry.handle(state, "/add new:School Homework")
    assert "School" in registry.handle(state, "/cats")
    assert registry.handle(state, "/save") == "Saved 1 active and 0 archived tasks."


def test_console_loop_saves_through_sqlite(sqlite_state, capsys) -> None:
    lines = iter(["/add urgent Buy milk", "", "just text", "/exit"])

    run_console_loop(sqlite_state, read_line=lambda _prompt: next(lines))

    out = capsys.readouterr().out
    assert "Added 'Buy milk'" in out
    assert "Not a command" in out

    sqlite_state.tasks = []
    load_state(sqlite_state)
    assert [t.title for t in sqlite_state.tasks] == ["Buy milk"]


def test_console_loop_stops_on_eof(state) -> None:
    def read_line(_prompt: str) -> str:
        raise EOFError

    run_console_loop(state, read_line=read_line)


def test_add_with_quoted_multi_word_category(state) -> None:
    reply = registry.handle(state, '/add new:"Home Office" Fix sink | leaks')

    assert reply == "Added 'Fix sink' to new category 'Home Office'."
    assert [c.name for c in state.category_store.categories] == ["Home Office"]
    assert state.tasks[0].description == "leaks"

    assert "to 'Home Office'" in registry.handle(state, '/add custom:"Home Office" Mop floor')
    assert state.tasks[1].custom_category == state.tasks[0].custom_category


def test_add_unquoted_category_stops_at_first_space(state) -> None:
    registry.handle(state, "/add new:Home Office Fix sink")

    assert state.tasks[0].category_name == "Home"
    assert state.tasks[0].title == "Office Fix sink"
    assert registry.handle(state, '/add new:"Home Office"').startswith("Usage")
    assert "quote names with spaces" in registry.handle(state, "/add")
