import json
import logging
import runpy
from pathlib import Path
from unittest.mock import patch

import pytest

from graphkit import cli


@pytest.fixture
def square_file(tmp_path: Path) -> Path:
    path = tmp_path / "square.txt"
    path.write_text(
        "# src dst capacity\n1 2 10\n1 3 5\n2 3 4\n2 4 10\n3 4 10\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def cycle_file(tmp_path: Path) -> Path:
    path = tmp_path / "cycle.txt"
    path.write_text("1 2 1\n2 3 1\n3 1 1\n3 4 1\n", encoding="utf-8")
    return path


def run_json(argv, capsys):
    cli.main(argv)
    return json.loads(capsys.readouterr().out)


def test_bfs(square_file: Path, capsys) -> None:
    assert run_json(["bfs", str(square_file), "1", "4"], capsys) == [1, 2, 4]


def test_dfs_tree_and_forest(tmp_path: Path, capsys) -> None:
    path = tmp_path / "dfs.txt"
    path.write_text("1 2\n3 4\n", encoding="utf-8")
    columns = ["--columns", "src", "dst"]

    tree = run_json(["dfs", str(path), "1", *columns], capsys)
    assert tree == {"1": [1, 4], "2": [2, 3]}

    forest = run_json(["dfs", str(path), "1", "--forest", *columns], capsys)
    assert set(forest) == {"1", "2", "3", "4"}


def test_topsort(square_file: Path, capsys) -> None:
    order = run_json(["topsort", str(square_file)], capsys)
    assert order[0] == 1 and order[-1] == 4


def test_sssp_serializes_infinity(square_file: Path, capsys) -> None:
    dist = run_json(["sssp", str(square_file), "2"], capsys)
    assert dist == {"1": float("inf"), "2": 0, "3": 4, "4": 10}


def test_apsp(square_file: Path, capsys) -> None:
    dist = run_json(["apsp", str(square_file)], capsys)
    assert dist["1"]["4"] == 15
    assert dist["4"]["4"] == 0


def test_maxflow(square_file: Path, capsys) -> None:
    assert run_json(["maxflow", str(square_file), "1", "4"], capsys) == 15


def test_betweenness(tmp_path: Path, capsys) -> None:
    path = tmp_path / "line.txt"
    path.write_text("1,2\n2,1\n2,3\n3,2\n", encoding="utf-8")
    args = ["betweenness", str(path), "-s", ",", "-c", "src", "dst"]

    assert run_json(args, capsys) == {"1": 0, "2": 2, "3": 0}
    assert run_json([*args, "--undirected"], capsys) == {"1": 0, "2": 1, "3": 0}


def test_pagerank(square_file: Path, capsys) -> None:
    ranks = run_json(["pagerank", str(square_file), "--damping", "0"], capsys)
    assert ranks == pytest.approx({"1": 0.25, "2": 0.25, "3": 0.25, "4": 0.25})


def test_scc(cycle_file: Path, capsys) -> None:
    assert run_json(["scc", str(cycle_file)], capsys) == [[1, 2, 3], [4]]


def test_topsort_on_cycle_exits_with_error(cycle_file: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="graphkit"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["topsort", str(cycle_file)])
    assert exc_info.value.code == 1
    assert "CycleDetectedError" in caplog.text


def test_unknown_node_exits_with_error(square_file: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["bfs", str(square_file), "1", "99"])
    assert exc_info.value.code == 1


def test_missing_file_exits_with_error(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="graphkit"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["scc", str(tmp_path / "nope.txt")])
    assert exc_info.value.code == 1
    assert "not found" in caplog.text


def test_malformed_file_exits_with_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_text("1 2 3 4\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["scc", str(path)])
    assert exc_info.value.code == 1


def test_columns_without_endpoints_exit_with_error(
    square_file: Path, caplog
) -> None:
    with caplog.at_level(logging.ERROR, logger="graphkit"):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["scc", str(square_file), "--columns", "a", "b", "c"])
    assert exc_info.value.code == 1
    assert "required column" in caplog.text


def test_no_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: graphkit" in capsys.readouterr().out


def test_unknown_command_exits_nonzero() -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["nonsense"])
    assert exc_info.value.code == 2


def test_verbose_and_quiet_switch_levels(square_file: Path, caplog, capsys) -> None:
    with caplog.at_level(logging.DEBUG, logger="graphkit"):
        cli.main(["--verbose", "maxflow", str(square_file), "1", "4"])
    assert any("Debug logging enabled" in r.message for r in caplog.records)

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="graphkit"):
        cli.main(["--quiet", "maxflow", str(square_file), "1", "4"])
    assert not any(r.levelno == logging.INFO for r in caplog.records)


def test_format_duration() -> None:
    assert cli._format_duration(0.1234) == "123.4 ms"
    assert cli._format_duration(1.234) == "1.23 s"
    assert cli._format_duration(75.2) == "1m 15.2s"


def test_module_help_exits_zero() -> None:
    """Running ``python -m graphkit --help`` exits cleanly with code 0."""
    with patch("sys.argv", ["graphkit", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("graphkit", run_name="__main__")
    assert exc_info.value.code == 0
