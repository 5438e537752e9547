import io

import pytest

from mindmap.cli import run_command, shell, main
from mindmap.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(svg_path=str(tmp_path / "out.svg"))


def test_add_command(mindmap, settings, capsys):
    assert run_command(mindmap, "add 0 big idea here", settings) is True
    assert "Added node 1 as a child of 0" in capsys.readouterr().out
    assert mindmap.get_node(1).text == "big idea here"


def test_add_missing_parent(mindmap, settings, capsys):
    run_command(mindmap, "add 7 nothing", settings)
    assert "parent node 7 does not exist" in capsys.readouterr().out
    assert mindmap.node_count == 1


def test_add_bad_id(mindmap, settings, capsys):
    run_command(mindmap, "add x text", settings)
    assert "parent_id must be an integer" in capsys.readouterr().out
    assert mindmap.node_count == 1


def test_move_command(mindmap, settings, capsys):
    run_command(mindmap, "move 0 10 -5", settings)
    assert "Moved node 0" in capsys.readouterr().out
    assert mindmap.root.position == (10.0, -5.0)


def test_move_errors(mindmap, settings, capsys):
    run_command(mindmap, "move 3 1 1", settings)
    run_command(mindmap, "move 0 a 1", settings)
    run_command(mindmap, "move 0 1", settings)
    out = capsys.readouterr().out
    assert "node 3 does not exist" in out
    assert "dx must be a number" in out
    assert "usage: move" in out


def test_list_command(populated, settings, capsys):
    run_command(populated, "list", settings)
    out = capsys.readouterr().out
    assert "[0] root (pos: 0.0, 0.0) level: 0" in out
    assert "children: [1, 2]" in out
    assert "[1] a (pos: 225.0, 0.0) level: 1" in out


def test_dot_command(populated, settings, capsys):
    run_command(populated, "dot", settings)
    assert "digraph {" in capsys.readouterr().out


def test_svg_command_default_path(populated, settings, capsys):
    run_command(populated, "svg", settings)
    assert "Saved as" in capsys.readouterr().out
    with open(settings.svg_path, encoding="utf-8") as f:
        assert f.read().startswith("<svg")


def test_svg_command_failure(populated, settings, tmp_path, capsys):
    run_command(populated, f"svg {tmp_path / 'nope' / 'x.svg'}", settings)
    assert "failed to save" in capsys.readouterr().out


def test_stats_and_validate(populated, settings, capsys):
    run_command(populated, "stats", settings)
    run_command(populated, "validate", settings)
    out = capsys.readouterr().out
    assert "Nodes: 5  Edges: 4" in out
    assert "Valid" in out


def test_unknown_blank_and_quit(mindmap, settings, capsys):
    assert run_command(mindmap, "frobnicate", settings) is True
    assert "Unknown command" in capsys.readouterr().out
    assert run_command(mindmap, "   ", settings) is True
    assert run_command(mindmap, "quit", settings) is False
    assert run_command(mindmap, "exit", settings) is False


def test_shell_reads_until_quit(mindmap, settings, capsys):
    stdin = io.StringIO("add 0 child\nadd 1 grandchild\nquit\nadd 0 never\n")
    shell(mindmap, settings, stdin=stdin)
    assert mindmap.node_count == 3


def test_shell_stops_at_end_of_input(mindmap, settings):
    shell(mindmap, settings, stdin=io.StringIO("add 0 child\n"))
    assert mindmap.node_count == 2


def test_main_runs_shell(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("MINDMAP_SVG_PATH", str(tmp_path / "main.svg"))
    monkeypatch.setattr("sys.stdin", io.StringIO("add 0 child\nsvg\nquit\n"))
    main(["--root-text", "hub", "shell"])
    out = capsys.readouterr().out
    assert "Added node 1 as a child of 0" in out
    assert (tmp_path / "main.svg").exists()


@pytest.mark.parametrize("line", ["move 0 inf 0", "move 0 0 -inf", "move 0 nan 0", "move 0 1e309 0"])
def test_move_rejects_non_finite_offsets(mindmap, settings, capsys, line):
    run_command(mindmap, line, settings)
    assert "must be a finite number" in capsys.readouterr().out
    assert mindmap.root.position == (0.0, 0.0)


@pytest.mark.parametrize("name,value", [("MINDMAP_PORT", "eighty"), ("MINDMAP_LOG_LEVEL", "LOUD")])
def test_main_rejects_bad_settings(monkeypatch, capsys, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(SystemExit) as exc_info:
        main(["shell"])
    assert exc_info.value.code == 2
    assert "invalid settings" in capsys.readouterr().err


def test_main_rejects_bad_log_level_flag(capsys):
    with pytest.raises(SystemExit):
        main(["--log-level", "chatty", "shell"])
    assert "unknown log level" in capsys.readouterr().err
