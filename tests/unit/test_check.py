
import pathlib
import pytest

from gitinfo.check import check_file, check_text, drop_data_uri_icon
from gitinfo.errors import ParseFailure, ValidationError
from gitinfo.schema import load_schema

FIX = pathlib.Path(__file__).parent.parent / "fixtures" / "gitinfo"


@pytest.fixture
def schema():
    return load_schema()


def test_valid_fixture(schema):
    report = check_file(FIX / "valid.gitinfo", schema, allow_data_uri_icon=True)
    assert report.valid
    assert report.errors == []
    assert report.source.endswith("valid.gitinfo")


def test_invalid_fixture_lists_every_error_in_order(schema):
    report = check_file(FIX / "invalid.gitinfo", schema)
    assert not report.valid
    assert [str(e) for e in report.errors] == [
        'root: unknown property "bogus"',
        '.root: invalid URI "not-a-url"',
        ".description: string too short (min 1)",
        ".tags[1]: does not match pattern ^[a-z0-9][a-z0-9-]*$",
        ".authors[0][1]: expected string",
        ".funding: expected object",
    ]


def test_broken_fixture_is_a_parse_failure(schema):
    with pytest.raises(ParseFailure) as excinfo:
        check_file(FIX / "broken.gitinfo", schema)
    assert excinfo.value.source.endswith("broken.gitinfo")


def test_missing_file(schema, tmp_path):
    with pytest.raises(ParseFailure) as excinfo:
        check_file(tmp_path / ".gitinfo", schema)
    assert str(excinfo.value).startswith("File not found:")


def test_bom_is_tolerated(schema, tmp_path):
    p = tmp_path / ".gitinfo"
    p.write_bytes(b'\xef\xbb\xbf{"root": "https://example.com"}')
    assert check_file(p, schema).valid


def test_data_uri_icon_exception(schema):
    text = '{"icon": "data:image/png;base64,AAAA"}'
    assert check_text(text, schema, allow_data_uri_icon=True).valid
    strict = check_text(text, schema, allow_data_uri_icon=False)
    assert [str(e) for e in strict.errors] == ['.icon: invalid URI "data:image/png;base64,AAAA"']


def test_data_uri_exception_is_icon_only(schema):
    report = check_text('{"homepage": "data:image/png;base64,AAAA"}', schema, allow_data_uri_icon=True)
    assert len(report.errors) == 1


def test_drop_data_uri_icon_keeps_other_errors():
    errors = [
        ValidationError(".icon", 'invalid URI "data:image/gif;base64,R0lG"'),
        ValidationError("", 'unknown property "x"'),
    ]
    kept = drop_data_uri_icon({"icon": "data:image/gif;base64,R0lG", "x": 1}, errors)
    assert kept == [errors[1]]
    assert drop_data_uri_icon({"icon": "ftp://x"}, errors[:1]) == errors[:1]
    assert drop_data_uri_icon([], errors) == errors


def test_report_to_dict(schema):
    report = check_text('{"bogus": 1}', schema, source="inline")
    assert report.to_dict() == {
        "source": "inline",
        "valid": False,
        "errors": [{"path": "root", "message": 'unknown property "bogus"'}],
    }
