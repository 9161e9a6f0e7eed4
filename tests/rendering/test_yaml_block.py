# topmark:header:start
#
#   project      : TapRender
#   file         : test_yaml_block.py
#   file_relpath : tests/rendering/test_yaml_block.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for fenced YAML diagnostic blocks."""

from __future__ import annotations

from collections import OrderedDict
from types import MappingProxyType

import pytest
import yaml

from taprender.core.errors import MalformedEventError, UnrenderablePayloadError
from taprender.rendering.messages import render_yaml_block


def test_flat_mapping_keeps_key_order() -> None:
    """Keys are emitted in the order given, not sorted."""
    lines = render_yaml_block({"severity": "fail", "message": "boom", "at": 3})
    assert lines == [
        "  ---",
        "  severity: fail",
        "  message: boom",
        "  at: 3",
        "  ...",
    ]


def test_block_indent_follows_depth() -> None:
    """Every line sits at the owner's indent plus the fixed inner indent."""
    lines = render_yaml_block({"message": "deep"}, 8)
    assert lines == ["          ---", "          message: deep", "          ..."]


def test_nested_values() -> None:
    """Nested mappings and sequences use block style."""
    lines = render_yaml_block({"found": {"a": 1}, "wanted": [1, 2], "ok": False})
    assert lines == [
        "  ---",
        "  found:",
        "    a: 1",
        "  wanted:",
        "  - 1",
        "  - 2",
        "  ok: false",
        "  ...",
    ]


def test_multi_line_string_is_literal_block() -> None:
    """Stack traces stay readable as literal blocks."""
    lines = render_yaml_block({"stack": "at one\nat two"})
    assert lines == ["  ---", "  stack: |-", "    at one", "    at two", "  ..."]


def test_empty_mapping_renders_fences_only() -> None:
    """An empty diagnostic still produces a (valid, empty) block."""
    assert render_yaml_block({}, 4) == ["      ---", "      ..."]


def test_block_body_is_valid_yaml() -> None:
    """The text between the fences parses back to the payload."""
    payload = {"message": "x: y", "count": 2, "tags": ["a", "b"], "none": None}
    lines = render_yaml_block(payload)
    body = "\n".join(line[2:] for line in lines[1:-1])
    assert yaml.safe_load(body) == payload


def test_ordered_dict_payload_is_accepted() -> None:
    """Any top-level mapping type is accepted."""
    lines = render_yaml_block(OrderedDict([("b", 1), ("a", 2)]))
    assert lines[1:3] == ["  b: 1", "  a: 2"]


def test_nested_mappings_of_any_type_are_accepted() -> None:
    """Nested mapping types and tuples render like plain dicts and lists."""
    payload = {
        "found": OrderedDict([("b", 1), ("a", 2)]),
        "wanted": MappingProxyType({"b": 1}),
        "at": ("x.py", 3),
    }
    lines = render_yaml_block(payload)
    body = "\n".join(line[2:] for line in lines[1:-1])
    assert yaml.safe_load(body) == {
        "found": {"b": 1, "a": 2},
        "wanted": {"b": 1},
        "at": ["x.py", 3],
    }
    assert lines[1:4] == ["  found:", "    b: 1", "    a: 2"]


def test_non_mapping_payload_is_malformed() -> None:
    """A diagnostic payload must be a mapping."""
    with pytest.raises(MalformedEventError):
        render_yaml_block(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_unrepresentable_value_is_unrenderable() -> None:
    """Values outside the YAML data model raise instead of being dropped."""
    with pytest.raises(UnrenderablePayloadError) as excinfo:
        render_yaml_block({"handle": object()})
    assert isinstance(excinfo.value.__cause__, yaml.YAMLError)
