# topmark:header:start
#
#   project      : TreeQ
#   file         : test_properties_encoder.py
#   file_relpath : tests/encoders/test_properties_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the Java-properties encoder."""

from __future__ import annotations

import io
from typing import Any

from tests.conftest import mark_encoders
from treeq.config.preferences import PropertiesPreferences
from treeq.core.node import CandidateNode, node_from_value
from treeq.encoders.properties_encoder import PropertiesEncoder


def _encode(node: CandidateNode, **prefs: Any) -> str:
    sink = io.BytesIO()
    PropertiesEncoder(PropertiesPreferences(**prefs)).encode(sink, node)
    return sink.getvalue().decode("utf-8")


@mark_encoders
def test_paths_are_flattened() -> None:
    """Nested keys and sequence indices join with dots."""
    node = node_from_value({"a": {"b": "c d"}, "list": ["x", "y"]})
    assert _encode(node) == "a.b = c d\nlist.0 = x\nlist.1 = y\n"


@mark_encoders
def test_array_brackets() -> None:
    """Indices can be written in brackets."""
    node = node_from_value({"list": ["x"]})
    assert _encode(node, use_array_brackets=True) == "list[0] = x\n"


@mark_encoders
def test_key_value_separator() -> None:
    """The separator between key and value is configurable."""
    assert _encode(node_from_value({"k": "v"}), key_value_separator="=") == "k=v\n"


@mark_encoders
def test_keys_and_values_are_escaped() -> None:
    """Special characters in keys and values are backslash-escaped."""
    node = node_from_value({"a b:c": "line\nbreak"})
    assert _encode(node) == "a\\ b\\:c = line\\nbreak\n"


@mark_encoders
def test_top_level_scalar() -> None:
    """Scalars print escaped, or raw when unwrapping."""
    assert _encode(CandidateNode.scalar("a\tb")) == "a\\tb\n"
    assert _encode(CandidateNode.scalar("a\tb"), unwrap_scalar=True) == "a\tb\n"


@mark_encoders
def test_key_comments_are_written() -> None:
    """Head comments of keys become ``#`` lines above the entry."""
    key = CandidateNode.scalar("a", head_comment="# about a")
    node = CandidateNode.mapping([(key, CandidateNode.scalar("1"))])
    assert _encode(node) == "# about a\na = 1\n"


@mark_encoders
def test_leading_content_as_comments() -> None:
    """Leading content is written as ``#`` comment lines."""
    sink = io.BytesIO()
    PropertiesEncoder(PropertiesPreferences()).print_leading_content(sink, "# hello\nworld\n")
    assert sink.getvalue() == b"# hello\n# world\n"
