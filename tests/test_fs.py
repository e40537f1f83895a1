import pytest

from bomboni.fs import visit_files, visit_files_contents


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.proto").write_text("alpha", encoding="utf-8")
    (tmp_path / "b.txt").write_text("beta", encoding="utf-8")
    nested = tmp_path / "nested" / "deeper"
    nested.mkdir(parents=True)
    (nested / "c.proto").write_text("gamma", encoding="utf-8")
    (nested / "d.rs").write_text("delta", encoding="utf-8")
    (tmp_path / ".proto").write_text("hidden", encoding="utf-8")
    return tmp_path


def test_visit_files_filters_by_extension(tree):
    names = sorted(entry.name for entry in visit_files(tree, ["proto"]))
    assert names == ["a.proto", "c.proto"]


def test_visit_files_multiple_extensions(tree):
    names = sorted(entry.name for entry in visit_files(tree, ["proto", "rs"]))
    assert names == ["a.proto", "c.proto", "d.rs"]


def test_visit_files_no_match(tree):
    assert list(visit_files(tree, ["md"])) == []


def test_visit_files_contents(tree):
    contents = {entry.name: text for entry, text in visit_files_contents(tree, ["proto", "txt"])}
    assert contents == {"a.proto": "alpha", "b.txt": "beta", "c.proto": "gamma"}


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(visit_files(tmp_path / "missing", ["proto"]))