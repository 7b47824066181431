"""Тести CLI `tools.json_view` (файл -> Rich-вивід, exit codes)."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from tools.json_view import build_insights_table, main


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


def _write(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("INDENT", "MAX_STRING_LENGTH", "MAX_ARRAY_SIZE", "COMPACT", "THEME_PATH"):
        monkeypatch.delenv(f"JSONSCOPE_{name}", raising=False)


def test_plain_output_respects_budgets(tmp_path: Path) -> None:
    path = _write(tmp_path, {"arr": list(range(10)), "s": "q" * 30})
    console = _console()

    code = main(
        [str(path), "--plain", "--indent", "0", "--max-array-size", "3", "--max-string-length", "14"],
        console=console,
    )

    output = console.file.getvalue()  # type: ignore[attr-defined]
    assert code == 0
    assert '"…8 more items…"' in output
    assert '"qq …28 more chars…"' in output


def test_panel_output_contains_title_and_keys(tmp_path: Path) -> None:
    path = _write(tmp_path, {"symbol": "XAUUSD", "price": 2412.5})
    console = _console()

    code = main([str(path), "--title", "state"], console=console)

    output = console.file.getvalue()  # type: ignore[attr-defined]
    assert code == 0
    assert "state" in output
    assert '"symbol": "XAUUSD"' in output


def test_find_prints_dotted_path(tmp_path: Path) -> None:
    path = _write(tmp_path, {"assets": [{"symbol": "xauusd"}]})
    console = _console()

    code = main([str(path), "--find", "XAU", "--ignore-case"], console=console)

    assert code == 0
    assert console.file.getvalue().strip() == "assets.0.symbol"  # type: ignore[attr-defined]


def test_find_missing_keyword_returns_1(tmp_path: Path) -> None:
    path = _write(tmp_path, {"a": "b"})
    assert main([str(path), "--find", "zzz"], console=_console()) == 1


def test_invalid_json_returns_2(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert main([str(path)], console=_console()) == 2


def test_missing_file_returns_2(tmp_path: Path) -> None:
    assert main([str(tmp_path / "absent.json")], console=_console()) == 2


def test_stdin_source(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('[1, 2, 3]'))
    console = _console()

    code = main(["-", "--plain"], console=console)

    assert code == 0
    assert "[1, 2, 3]" in console.file.getvalue()  # type: ignore[attr-defined]


def test_insights_requires_array_of_objects(tmp_path: Path) -> None:
    path = _write(tmp_path, {"not": "a list"})
    assert main([str(path), "--insights"], console=_console()) == 2


def test_insights_table(tmp_path: Path) -> None:
    rows = [{"side": "buy" if i % 2 else "sell", "id": i} for i in range(8)]
    path = _write(tmp_path, rows)
    console = _console()

    code = main([str(path), "--insights"], console=console)

    output = console.file.getvalue()  # type: ignore[attr-defined]
    assert code == 0
    assert "side" in output
    assert "sell ×4" in output
    assert build_insights_table(rows).row_count == 1


@pytest.mark.parametrize("flag", ["unlimited", "none", "0"])
def test_unlimited_array_budget_overrides_default(tmp_path: Path, flag: str) -> None:
    path = _write(tmp_path, list(range(150)))
    console = _console()

    code = main([str(path), "--plain", "--max-array-size", flag], console=console)

    output = console.file.getvalue()  # type: ignore[attr-defined]
    assert code == 0
    assert "more items" not in output
    assert "149" in output


def test_unlimited_string_budget_overrides_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("JSONSCOPE_MAX_STRING_LENGTH", "20")
    path = _write(tmp_path, {"s": "z" * 40})
    console = _console()

    code = main([str(path), "--plain", "--max-string-length", "unlimited"], console=console)

    output = console.file.getvalue()  # type: ignore[attr-defined]
    assert code == 0
    assert "z" * 40 in output
    assert "more chars" not in output


def test_default_budget_applies_when_flag_absent(tmp_path: Path) -> None:
    path = _write(tmp_path, list(range(150)))
    console = _console()

    assert main([str(path), "--plain"], console=console) == 0
    assert '"…51 more items…"' in console.file.getvalue()  # type: ignore[attr-defined]


def test_invalid_env_config_returns_2(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSONSCOPE_MAX_ARRAY_SIZE", "not-a-number")
    path = _write(tmp_path, [1, 2])

    assert main([str(path), "--plain"], console=_console()) == 2
