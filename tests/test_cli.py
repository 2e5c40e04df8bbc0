import json
import logging
from pathlib import Path

import pytest

from tiles_ext.cli import main


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.fixture
def map_file(tmp_path: Path) -> Path:
    path = tmp_path / "map.txt"
    path.write_text("..#.\n.~#.\n~..~\n", encoding="utf-8")
    return path


def test_line_defaults_to_covering(capsys):
    assert main(["line", "0", "0", "3", "1"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == [
        {"col": 0, "row": 0},
        {"col": 1, "row": 0},
        {"col": 1, "row": 1},
        {"col": 2, "row": 1},
        {"col": 3, "row": 1},
    ]


def test_line_diagonal_exclusive(capsys):
    assert main(["line", "0", "0", "4", "2", "--mode", "diagonal", "--exclusive"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [(c["col"], c["row"]) for c in out] == [(1, 1), (2, 1), (3, 2)]


def test_line_with_map_reports_walls(capsys, map_file):
    assert main(["line", "0", "0", "3", "0", "--map", str(map_file)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [c["wall"] for c in out] == [False, False, True, False]


def test_settings_file_changes_default_mode(capsys, tmp_path):
    user = tmp_path / "settings.yaml"
    user.write_text("lines:\n  default_mode: diagonal\n  exclusive: true\n", encoding="utf-8")
    assert main(["--settings", str(user), "line", "0", "0", "4", "2"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [(c["col"], c["row"]) for c in out] == [(1, 1), (2, 1), (3, 2)]


def test_sample_is_reproducible_with_seed(capsys, map_file):
    assert main(["sample", "~", "2", "--map", str(map_file), "--seed", "5"]) == 0
    first = json.loads(capsys.readouterr().out)
    assert main(["sample", "~", "2", "--map", str(map_file), "--seed", "5"]) == 0
    second = json.loads(capsys.readouterr().out)
    assert first == second
    assert len(first) == 2


def test_missing_map_file_is_an_error(capsys, tmp_path):
    assert main(["line", "0", "0", "1", "1", "--map", str(tmp_path / "missing.txt")]) == 2
    assert "error" in capsys.readouterr().err


def test_bad_configured_mode_is_an_error(capsys, tmp_path):
    user = tmp_path / "settings.yaml"
    user.write_text("lines:\n  default_mode: wiggly\n", encoding="utf-8")
    assert main(["--settings", str(user), "line", "0", "0", "1", "1"]) == 2
    assert "Unknown line mode" in capsys.readouterr().err


def test_malformed_settings_yaml_is_an_error(capsys, tmp_path):
    user = tmp_path / "settings.yaml"
    user.write_text("lines: [unclosed\n", encoding="utf-8")
    assert main(["--settings", str(user), "line", "0", "0", "1", "1"]) == 2
    assert "error" in capsys.readouterr().err


def test_unknown_settings_key_is_an_error(capsys, tmp_path):
    user = tmp_path / "settings.yaml"
    user.write_text("lines:\n  defaultmode: diagonal\n", encoding="utf-8")
    assert main(["--settings", str(user), "line", "0", "0", "1", "1"]) == 2
    assert "defaultmode" in capsys.readouterr().err


def test_no_exclusive_overrides_configured_exclusive(capsys, tmp_path):
    user = tmp_path / "settings.yaml"
    user.write_text("lines:\n  exclusive: true\n", encoding="utf-8")
    assert main(["--settings", str(user), "line", "0", "0", "3", "1", "--no-exclusive"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert (out[0], out[-1]) == ({"col": 0, "row": 0}, {"col": 3, "row": 1})
    assert len(out) == 5


def test_map_file_trailing_blank_lines_are_ignored(capsys, tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("..#.\n....\n\n\n", encoding="utf-8")
    assert main(["line", "0", "1", "3", "1", "--map", str(path)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert [c["wall"] for c in out] == [False, False, False, False]


def test_map_file_blank_middle_row_is_an_error(capsys, tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("..#.\n\n....\n", encoding="utf-8")
    assert main(["line", "0", "0", "3", "0", "--map", str(path)]) == 2
    assert "equal width" in capsys.readouterr().err
