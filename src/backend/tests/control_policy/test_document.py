import pytest

from control_policy.document import ObjectNode, format_for_path, parse_document, read_document
from control_policy.errors import ConfigReadError, DocumentParseError


def test_json_stream_with_several_top_level_values():
    values = parse_document('{"max-iteration": 1}\n{"max-iteration": 2} [3]')
    assert len(values) == 3
    assert values[0].get("max-iteration") == 1
    assert values[2] == [3]


def test_json_objects_keep_order_and_duplicates():
    (value,) = parse_document('{"b": 1, "a": 2, "b": 3}')
    assert isinstance(value, ObjectNode)
    assert value.keys() == ["b", "a", "b"]
    assert list(value.items()) == [("b", 1), ("a", 2), ("b", 3)]
    assert value.get("b") == 3


def test_empty_document_has_no_values():
    assert parse_document("  \n ") == []


def test_malformed_json_reports_position():
    with pytest.raises(DocumentParseError) as exc:
        parse_document('{"rules": [\n  {"name": }]}', path="policy.json")
    assert exc.value.path == "policy.json"
    assert exc.value.line == 2


def test_yaml_documents():
    text = "rules:\n  - name: R1\n    priority: 5\n---\nmax-iteration: 3\n---\n"
    values = parse_document(text, "yaml")
    assert values == [{"rules": [{"name": "R1", "priority": 5}]}, {"max-iteration": 3}]


def test_malformed_yaml():
    with pytest.raises(DocumentParseError):
        parse_document("rules: [unclosed", "yaml")


def test_format_follows_suffix(tmp_path):
    assert format_for_path("policy.yaml") == "yaml"
    assert format_for_path("policy.YML") == "yaml"
    assert format_for_path("policy.json") == "json"
    path = tmp_path / "policy.yml"
    path.write_text("max-iteration: 4\n")
    assert read_document(path) == [{"max-iteration": 4}]


def test_unreadable_file(tmp_path):
    with pytest.raises(ConfigReadError) as exc:
        read_document(tmp_path)
    assert exc.value.path == str(tmp_path)


def test_byte_order_mark_is_skipped(tmp_path):
    path = tmp_path / "policy.json"
    path.write_bytes(b'\xef\xbb\xbf{"max-iteration": 2}')
    (value,) = read_document(path)
    assert value.get("max-iteration") == 2
