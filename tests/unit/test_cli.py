
import json
import pathlib

from gitinfo import cli

FIX = pathlib.Path(__file__).parent.parent / "fixtures" / "gitinfo"


def test_valid_file_exits_zero(capsys):
    assert cli.main([str(FIX / "valid.gitinfo")]) == 0
    out = capsys.readouterr().out
    assert "✓" in out and "valid.gitinfo is valid" in out


def test_quiet_suppresses_success(capsys):
    assert cli.main(["-q", str(FIX / "valid.gitinfo")]) == 0
    assert capsys.readouterr().out == ""


def test_invalid_file_lists_errors(capsys):
    assert cli.main(["--no-color", str(FIX / "invalid.gitinfo")]) == 1
    err = capsys.readouterr().err
    lines = err.splitlines()
    assert lines[0] == f"Validation failed for {FIX / 'invalid.gitinfo'}:"
    assert lines[1] == '  - root: unknown property "bogus"'
    assert len(lines) == 7


def test_missing_file(capsys, tmp_path):
    assert cli.main([str(tmp_path / ".gitinfo")]) == 1
    assert capsys.readouterr().err.startswith("Error: File not found:")


def test_default_document(capsys, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".gitinfo").write_text('{"root": "https://example.com",}', encoding="utf-8")
    assert cli.main([]) == 0
    assert ".gitinfo is valid" in capsys.readouterr().out


def test_parse_failure_does_not_stop_other_files(capsys):
    code = cli.main([str(FIX / "broken.gitinfo"), str(FIX / "valid.gitinfo")])
    assert code == 1
    captured = capsys.readouterr()
    assert "Error parsing JSONC" in captured.err
    assert "valid.gitinfo is valid" in captured.out


def test_bad_schema_aborts(capsys, tmp_path):
    schema = tmp_path / "schema.json"
    schema.write_text('{"type": "number"}', encoding="utf-8")
    assert cli.main(["--schema", str(schema), str(FIX / "valid.gitinfo")]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error: ")
    assert "invalid schema" in captured.err
    assert captured.out == ""


def test_strict_icon(capsys):
    assert cli.main(["--strict-icon", str(FIX / "valid.gitinfo")]) == 1
    assert '.icon: invalid URI "data:image/svg+xml' in capsys.readouterr().err


def test_json_format(capsys):
    code = cli.main(["--format", "json", str(FIX / "invalid.gitinfo"), str(FIX / "broken.gitinfo")])
    assert code == 1
    payload = json.loads(capsys.readouterr().out)
    first, second = payload["results"]
    assert first["valid"] is False
    assert first["errors"][0] == {"path": "root", "message": 'unknown property "bogus"'}
    assert second["valid"] is False
    assert "Error parsing JSONC" in second["error"]


def test_deeply_nested_document_fails_cleanly(capsys, tmp_path):
    p = tmp_path / ".gitinfo"
    p.write_text('{"tags": ' + "[" * 100000 + "]" * 100000 + "}", encoding="utf-8")
    assert cli.main([str(p)]) == 1
    assert "Error parsing JSONC" in capsys.readouterr().err


def test_error_lines_keep_brackets(capsys):
    cli.main([str(FIX / "invalid.gitinfo")])
    err = capsys.readouterr().err
    assert "  - .tags[1]: does not match pattern ^[a-z0-9][a-z0-9-]*$" in err
    assert "  - .authors[0][1]: expected string" in err
    assert "\033[" not in err
