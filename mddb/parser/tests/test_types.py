"""Tests for document record types."""

from mddb.parser.types import Checkbox, DocumentRecord, FrontMatter, Heading


def test_heading_render():
    assert Heading("Booleans", 2).render() == "## Booleans"


def test_checkbox_defaults_and_toggles():
    cb = Checkbox("A test checkbox with default value")
    assert cb.checked is False

    cb.check()
    assert cb.checked is True
    cb.uncheck()
    assert cb.checked is False

    cb.set_title("renamed")
    assert cb.title == "renamed"


def test_record_tasks_filter():
    record = DocumentRecord()
    record.add_checkbox("open")
    record.add_checkbox("done", True)

    assert [c.title for c in record.tasks()] == ["open", "done"]
    assert [c.title for c in record.tasks(checked=False)] == ["open"]
    assert [c.title for c in record.tasks(checked=True)] == ["done"]


def test_frontmatter_ignores_unknown_keys():
    fm = FrontMatter.from_mapping({"title": "T", "aliases": ["x"]})
    assert fm == FrontMatter(title="T")
    assert fm.to_dict()["tags"] == []


def test_frontmatter_null_values_default():
    fm = FrontMatter.from_mapping({"id": None, "tags": None, "owner": None})
    assert fm == FrontMatter()
