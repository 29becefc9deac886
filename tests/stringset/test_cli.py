from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from structlog.contextvars import clear_contextvars
from typer.testing import CliRunner

from stringset.cli import app
from stringset.config import get_settings


runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    # keep log lines out of the captured output
    monkeypatch.setenv("STRINGSET_LOG_LEVEL", "ERROR")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    clear_contextvars()


def _write_lines(path: Path, *lines: str) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _stdout_lines(result) -> list[str]:
    return [line for line in result.stdout.splitlines() if not line.endswith(" unique")]


def test_put_reports_duplicates() -> None:
    result = runner.invoke(app, ["put", "the", "less", "I", "know", "the", "better"])
    assert result.exit_code == 0, result.output
    assert "all_new=false size=5" in result.stdout


def test_put_distinct_words() -> None:
    result = runner.invoke(app, ["put", "a", "b"])
    assert result.exit_code == 0, result.output
    assert "all_new=true size=2" in result.stdout


def test_uniq_sorted_across_files(tmp_path: Path) -> None:
    first = _write_lines(tmp_path / "a.txt", "pear", "  apple ", "", "pear")
    second = _write_lines(tmp_path / "b.txt", "fig", "apple")

    result = runner.invoke(app, ["uniq", "--sorted", str(first), str(second)])
    assert result.exit_code == 0, result.output
    assert _stdout_lines(result) == ["apple", "fig", "pear"]


def test_uniq_respects_config(tmp_path: Path) -> None:
    words = _write_lines(tmp_path / "w.txt", " x", "x", "")
    config = tmp_path / "cfg.yaml"
    config.write_text("cli:\n  strip: false\n  skip_blank: false\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config), "uniq", "--sorted", str(words)])
    assert result.exit_code == 0, result.output
    assert _stdout_lines(result) == ["", " x", "x"]


def test_diff(tmp_path: Path) -> None:
    left = _write_lines(tmp_path / "left.txt", "a", "b", "c", "b")
    right = _write_lines(tmp_path / "right.txt", "b", "z", "b")

    result = runner.invoke(app, ["diff", str(left), str(right)])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == ["a", "c"]


def test_uniq_missing_file_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["uniq", str(tmp_path / "nope.txt")])
    assert result.exit_code != 0


def test_put_without_words_is_vacuously_true() -> None:
    result = runner.invoke(app, ["put"])
    assert result.exit_code == 0, result.output
    assert "all_new=true size=0" in result.stdout


def test_uniq_undecodable_file_is_a_usage_error(tmp_path: Path) -> None:
    broken = tmp_path / "broken.txt"
    broken.write_bytes(b"ok\n\xff\xfe\xfa\n")

    result = runner.invoke(app, ["uniq", str(broken)])
    assert result.exit_code == 2
    assert "utf-8" in result.output
    assert isinstance(result.exception, SystemExit)


def test_commands_log_through_configured_logging(tmp_path: Path) -> None:
    words = _write_lines(tmp_path / "w.txt", "a", "b")
    config = tmp_path / "cfg.yaml"
    config.write_text("logging:\n  json: true\n  logger_name: words\n", encoding="utf-8")

    result = runner.invoke(
        app, ["--config", str(config), "uniq", str(words)], env={"STRINGSET_LOG_LEVEL": "INFO"}
    )
    assert result.exit_code == 0, result.output
    assert '"event": "file loaded"' in result.output
    assert '"logger": "words.cli"' in result.output
