import io
import logging
from pathlib import Path

import pytest

from treewalker.cli import build_parser, main, make_filter
from treewalker.log import get_logger, setup_base_logger


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


@pytest.fixture
def data(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    _make_file(root / "a.txt")
    _make_file(root / "c.md")
    _make_file(root / "tmp/b.txt")
    return root


def test_cli_prints_accepted_paths(data: Path):
    out = io.StringIO()

    code = main([str(data), "--exclude", str(data / "tmp"), "--files-only"], out=out)

    assert code == 0
    assert out.getvalue().splitlines() == [str(data / "a.txt"), str(data / "c.md")]


def test_cli_suffix_filter_and_registry_view(data: Path):
    out = io.StringIO()

    code = main([str(data), "-x", str(data / "tmp"), "-s", "TXT", "--show-registry"], out=out)

    assert code == 0
    lines = out.getvalue().splitlines()
    assert lines[:3] == ["registry", f"└── + {data}", "    └── - tmp"]
    assert lines[3:] == [str(data / "a.txt")]


def test_cli_resolves_relative_roots(data: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(data.parent)
    out = io.StringIO()

    assert main(["data", "--files-only", "-x", "data/tmp"], out=out) == 0
    assert str(data / "a.txt") in out.getvalue()


def test_cli_requires_a_root():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args([])
    assert info.value.code == 2


def test_make_filter(tmp_path: Path):
    _make_file(tmp_path / "x.PY")
    (tmp_path / "d.py").mkdir()

    accept = make_filter([".py"], files_only=True)
    assert accept(tmp_path / "x.PY") is True
    assert accept(tmp_path / "d.py") is False
    assert make_filter([], files_only=False)(tmp_path / "d.py") is True


def test_setup_base_logger_configures_once():
    stream = io.StringIO()
    base = setup_base_logger(level="INFO", stream=stream)
    again = setup_base_logger(level=logging.DEBUG)

    assert base is again
    assert len(base.handlers) == 1
    assert base.level == logging.DEBUG

    get_logger("walker").warning("hello %s", "there")
    assert stream.getvalue() == "WARNING: hello there\n"


def test_get_logger_namespacing():
    assert get_logger().name == "treewalker"
    assert get_logger("treewalker").name == "treewalker"
    assert get_logger("cli").name == "treewalker.cli"
    assert get_logger("treewalker.walker").name == "treewalker.walker"
