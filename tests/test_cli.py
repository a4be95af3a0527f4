"""
Tests for the command-line interface.
"""

from pathlib import Path

import pytest

from nestprops import parse
from nestprops.__main__ import main


def test_print_document(sample_path: Path, sample_text: str, capsys) -> None:
    assert main([str(sample_path)]) == 0

    assert capsys.readouterr().out == sample_text


def test_get(sample_path: Path, capsys) -> None:
    assert main([str(sample_path), "--get", "server.port", "--get", "missing", "--default", "none"]) == 0

    assert capsys.readouterr().out == "8080\nnone\n"


def test_keys(sample_path: Path, capsys) -> None:
    assert main([str(sample_path), "--keys"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert "server.log.level = debug" in out
    assert out == sorted(out)


def test_pretty(sample_path: Path, sample_text: str, capsys) -> None:
    assert main([str(sample_path), "--pretty"]) == 0

    assert capsys.readouterr().out == parse(sample_text).text(pretty_print=True)


def test_set_and_remove_print_result(sample_path: Path, sample_text: str, capsys) -> None:
    assert main([str(sample_path), "--set", "server.port=9090", "--remove", "removeme"]) == 0

    expected = sample_text.replace("port = 8080", "port = 9090").replace("removeme = soon\n", "")
    assert capsys.readouterr().out == expected
    assert sample_path.read_text(encoding="utf-8") == sample_text


def test_write_in_place(sample_path: Path, sample_text: str, capsys) -> None:
    assert main([str(sample_path), "--set", "server.port=9090", "--comment", "edited", "--write"]) == 0

    expected = sample_text.replace("port = 8080", "port = 9090") + "\n# edited\n"
    assert sample_path.read_text(encoding="utf-8") == expected
    assert capsys.readouterr().out == ""


def test_output_file(sample_path: Path, sample_text: str, tmp_path: Path) -> None:
    target = tmp_path / "out.properties"

    assert main([str(sample_path), "--set", "added=yes", "-o", str(target)]) == 0

    assert target.read_text(encoding="utf-8") == sample_text + "added = yes\n"
    assert sample_path.read_text(encoding="utf-8") == sample_text


def test_validate(sample_path: Path, capsys) -> None:
    assert main([str(sample_path), "--validate"]) == 0

    out = capsys.readouterr().out
    assert "Document is valid!" in out
    assert "warnings" not in out


def test_validate_prints_warnings(tmp_path: Path, capsys) -> None:
    path = tmp_path / "dup.properties"
    path.write_text("a = 1\na = 2\n", encoding="utf-8")

    assert main([str(path), "--validate"]) == 0

    assert "'a' overrides the value from line 1" in capsys.readouterr().out


def test_missing_file(tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "nope.properties")]) == 1

    assert "File not found" in capsys.readouterr().err


def test_template_error(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.properties"
    path.write_text("%missing%\n", encoding="utf-8")

    assert main([str(path)]) == 1

    assert "Template is not defined: missing" in capsys.readouterr().err


def test_invalid_set_argument(sample_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([str(sample_path), "--set", "no-assignment"])

    assert exc_info.value.code == 2
