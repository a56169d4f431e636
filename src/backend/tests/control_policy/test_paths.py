import pytest

from control_policy.errors import PathNotFoundError
from control_policy.paths import resolve_path


def test_first_existing_candidate_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    for d in (first, second):
        d.mkdir()
        (d / "rule.py").write_text("")
    assert resolve_path("rule.py", [str(tmp_path / "missing"), str(first), str(second)]) == str(first / "rule.py")


def test_not_found_lists_searched_paths(tmp_path):
    with pytest.raises(PathNotFoundError) as exc:
        resolve_path("rule.py", [str(tmp_path)])
    assert exc.value.target == "rule.py"
    assert exc.value.search_paths == (str(tmp_path),)
    assert "rule.py could not be found" in str(exc.value)


def test_empty_search_paths_use_configured_module_paths(tmp_path, monkeypatch):
    (tmp_path / "rule.py").write_text("")
    monkeypatch.setenv("CONTROL_POLICY_MODULE_PATHS", str(tmp_path))
    assert resolve_path("rule.py", []) == str(tmp_path / "rule.py")


def test_absolute_filenames_checked_directly(tmp_path):
    target = tmp_path / "rule.py"
    target.write_text("")
    assert resolve_path(str(target), ["/nonexistent"]) == str(target)
    with pytest.raises(PathNotFoundError):
        resolve_path(str(tmp_path / "other.py"), [str(tmp_path)])
