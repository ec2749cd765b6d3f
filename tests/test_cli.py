import io
from pathlib import Path

import pytest

from g4fmt.cli import EXIT_CHANGED, EXIT_ERROR, EXIT_OK, main

UNFORMATTED = "grammar T;\nfoo : 'a' 'b' ;\n"
FORMATTED = "grammar T;\n\nfoo\n   : 'a' 'b'\n   ;\n"


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_formats_file_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    grammar = _write(tmp_path / "T.g4", UNFORMATTED)

    assert main([str(grammar)]) == EXIT_OK

    captured = capsys.readouterr()
    assert captured.out == FORMATTED
    assert grammar.read_text(encoding="utf-8") == UNFORMATTED


def test_reads_stdin_without_paths(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(UNFORMATTED))

    assert main([]) == EXIT_OK
    assert capsys.readouterr().out == FORMATTED


def test_check_mode_reports_files_that_would_change(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    changed = _write(tmp_path / "A.g4", UNFORMATTED)
    clean = _write(tmp_path / "B.g4", FORMATTED)

    assert main(["--check", str(changed)]) == EXIT_CHANGED
    assert main(["--check", str(clean)]) == EXIT_OK

    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"would reformat {changed}" in captured.err
    assert str(clean) not in captured.err


def test_in_place_rewrites_changed_files(tmp_path: Path) -> None:
    grammar = _write(tmp_path / "T.g4", UNFORMATTED)

    assert main(["--in-place", str(grammar)]) == EXIT_OK
    assert grammar.read_text(encoding="utf-8") == FORMATTED


def test_directories_are_searched_for_grammars(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "A.g4", UNFORMATTED)
    _write(tmp_path / "nested" / "B.g4", UNFORMATTED)
    _write(tmp_path / "notes.txt", "not a grammar")

    assert main(["--check", "--no-progress", str(tmp_path)]) == EXIT_CHANGED

    err = capsys.readouterr().err
    assert err.count("would reformat") == 2
    assert "notes.txt" not in err


def test_in_place_with_progress_over_several_files(tmp_path: Path) -> None:
    first = _write(tmp_path / "A.g4", UNFORMATTED)
    second = _write(tmp_path / "B.g4", FORMATTED)

    assert main(["-i", str(tmp_path)]) == EXIT_OK
    assert first.read_text(encoding="utf-8") == FORMATTED
    assert second.read_text(encoding="utf-8") == FORMATTED


def test_indent_width_and_flat_contexts_flags(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    grammar = _write(tmp_path / "T.g4", UNFORMATTED)

    assert main(["--indent-width", "2", "--flat-contexts", str(grammar)]) == EXIT_OK
    assert capsys.readouterr().out == "grammar T;\n\nfoo\n  : 'a' 'b'\n  ;\n"


def test_parse_errors_exit_with_error_and_leave_file_alone(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = "grammar T;\nfoo : a\n"
    grammar = _write(tmp_path / "Broken.g4", source)

    assert main(["-i", str(grammar)]) == EXIT_ERROR

    err = capsys.readouterr().err
    assert f"{grammar}:2:" in err
    assert "error PARSER_EXPECTED_TOKEN" in err
    assert grammar.read_text(encoding="utf-8") == source


def test_missing_file_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "Missing.g4"

    assert main([str(missing)]) == EXIT_ERROR
    assert f"{missing}: error:" in capsys.readouterr().err


def test_empty_directory_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(tmp_path)]) == EXIT_ERROR
    assert "no grammar files found" in capsys.readouterr().err


def test_in_place_and_check_are_exclusive(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--in-place", "--check", "x.g4"])

    assert excinfo.value.code == 2
