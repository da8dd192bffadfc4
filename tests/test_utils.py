"""Tests for shared utilities (bpgen.utils).

Covers:
- LogBuffer prefixes, output joining, flush and quiet mode
- render_tree text output
- JSON helpers
- Template-argument parsing (key=value, nested keys, list keys)
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from bpgen.utils import (
    LogBuffer,
    build_object,
    ensure_dir,
    get_template_args,
    get_template_data,
    load_json,
    parse_key_values,
    render_tree,
    save_json,
    set_value,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# LogBuffer
# ---------------------------------------------------------------------------


class TestLogBuffer:
    def test_prefixes(self):
        log = LogBuffer(quiet=True)
        log.info("note")
        log.warning("careful")
        log.success("done")
        returned = log.error("broken")
        assert returned == "❌ broken"
        assert log.output() == "ℹ️ note\n⚠️ careful\n✅ done\n❌ broken"

    def test_text_accepts_several_values(self):
        log = LogBuffer(quiet=True)
        log.text("a", 1)
        assert log.output() == "a\n1"

    def test_flush_prints_and_clears(self):
        log = LogBuffer()
        log.success("done")
        with patch("bpgen.utils.console") as console:
            text = log.flush()
        console.print.assert_called_once()
        assert text == "✅ done"
        assert log.output() == ""

    def test_quiet_flush_prints_nothing(self):
        log = LogBuffer(quiet=True)
        log.text("hidden")
        with patch("bpgen.utils.console") as console:
            log.flush()
        console.print.assert_not_called()

    def test_tree(self):
        log = LogBuffer(quiet=True)
        log.tree({"Ada": {"Ada.txt": {}}}, "out")
        output = log.output()
        assert output.splitlines()[0] == "out"
        assert "Ada" in output
        assert "Ada.txt" in output


def test_render_tree_leaves():
    text = render_tree({"a": {"b": None}, "c": 1}, "root")
    lines = text.splitlines()
    assert lines[0] == "root"
    assert any(line.endswith("b") for line in lines)
    assert any(line.endswith("c: 1") for line in lines)


# ---------------------------------------------------------------------------
# JSON / file-system helpers
# ---------------------------------------------------------------------------


class TestJsonHelpers:
    def test_save_creates_parents(self, tmp_path: Path):
        target = save_json({"b": 1, "a": [1, 2]}, tmp_path / "deep" / "data.json")
        raw = target.read_text(encoding="utf-8")
        assert raw.endswith("\n")
        assert json.loads(raw) == {"b": 1, "a": [1, 2]}
        assert load_json(target) == {"b": 1, "a": [1, 2]}

    def test_load_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    def test_ensure_dir(self, tmp_path: Path):
        path = ensure_dir(tmp_path / "x" / "y")
        assert path.is_dir()
        assert ensure_dir(path) == path


# ---------------------------------------------------------------------------
# Template arguments
# ---------------------------------------------------------------------------


class TestTemplateArguments:
    def test_option_arguments_dropped(self):
        assert get_template_args(["a=1", "--dest", "b=2"]) == ["a=1", "b=2"]

    def test_split_on_first_equals(self):
        assert parse_key_values(["url=a=b", "flag"]) == [("url", "a=b"), ("flag", None)]

    def test_nested_keys(self):
        assert build_object([("meta.author", "Ada"), ("meta.year", "1843")]) == {
            "meta": {"author": "Ada", "year": "1843"}
        }

    def test_list_append(self):
        assert build_object([("props[]", "id"), ("props[]", "name")]) == {"props": ["id", "name"]}

    def test_list_index_pads_with_none(self):
        assert build_object([("items[2]", "c"), ("items[0]", "a")]) == {"items": ["a", None, "c"]}

    def test_multi_digit_index(self):
        data = build_object([("items[10]", "k")])
        assert len(data["items"]) == 11
        assert data["items"][10] == "k"

    def test_nested_list(self):
        assert build_object([("a.b[]", "x")]) == {"a": {"b": ["x"]}}

    def test_scalar_replaced_by_list(self):
        data = set_value({"props": "plain"}, "props[]", "id")
        assert data == {"props": ["id"]}

    def test_last_assignment_wins(self):
        assert get_template_data(["a=1", "a=2"]) == {"a": "2"}

    def test_full_pipeline(self):
        assert get_template_data(["title=Hi", "--verbose", "tags[]=x", "flag"]) == {
            "title": "Hi",
            "tags": ["x"],
            "flag": None,
        }
