# topmark:header:start
#
#   project      : TreeQ
#   file         : test_yaml_encoder.py
#   file_relpath : tests/encoders/test_yaml_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the YAML encoder."""

from __future__ import annotations

import io
from typing import Any

from tests.conftest import mark_encoders
from treeq.config.preferences import YamlPreferences
from treeq.constants import DOC_SEPARATOR_SENTINEL
from treeq.core.node import BOOL_TAG, INT_TAG, NULL_TAG, CandidateNode, Style, node_from_value
from treeq.encoders.yaml_encoder import YamlEncoder


def _encode(node: CandidateNode, **prefs: Any) -> str:
    sink = io.BytesIO()
    YamlEncoder(YamlPreferences(**prefs)).encode(sink, node)
    return sink.getvalue().decode("utf-8")


def _leading(content: str, **prefs: Any) -> str:
    sink = io.BytesIO()
    YamlEncoder(YamlPreferences(**prefs)).print_leading_content(sink, content)
    return sink.getvalue().decode("utf-8")


@mark_encoders
def test_block_mapping_with_indented_sequence() -> None:
    """Mappings print in block style; nested sequences are indented."""
    node = node_from_value({"name": "cat", "tags": ["a", "b"], "legs": 4, "wild": False})
    assert _encode(node) == "name: cat\ntags:\n  - a\n  - b\nlegs: 4\nwild: false\n"


@mark_encoders
def test_indent_preference() -> None:
    """Nesting uses the configured indent."""
    node = node_from_value({"a": {"b": "c"}})
    assert _encode(node, indent=4) == "a:\n    b: c\n"


@mark_encoders
def test_strings_that_look_like_other_types_are_quoted() -> None:
    """A ``!!str`` holding ``1`` or ``true`` must not read back as a number or boolean."""
    node = CandidateNode.mapping(
        [
            ("n", CandidateNode.scalar("1")),
            ("b", CandidateNode.scalar("true")),
            ("i", CandidateNode.scalar("1", INT_TAG)),
            ("t", CandidateNode.scalar("true", BOOL_TAG)),
            ("z", CandidateNode.scalar("null", NULL_TAG)),
        ]
    )
    assert _encode(node) == "n: '1'\nb: 'true'\ni: 1\nt: true\nz: null\n"


@mark_encoders
def test_anchor_and_alias_keep_their_names() -> None:
    """Anchors and aliases print with the names they were parsed with."""
    target = CandidateNode.mapping([("x", CandidateNode.scalar("v"))], anchor="base")
    node = CandidateNode.mapping([("first", target), ("second", CandidateNode.alias_to(target))])
    assert _encode(node) == "first: &base\n  x: v\nsecond: *base\n"


@mark_encoders
def test_unreferenced_anchor_is_kept() -> None:
    """An anchor without aliases in the output is still printed."""
    node = CandidateNode.mapping([("a", CandidateNode.scalar("v", anchor="lonely"))])
    assert _encode(node) == "a: &lonely v\n"


@mark_encoders
def test_top_level_scalar_unwrapped() -> None:
    """Top-level scalars print raw by default."""
    assert _encode(CandidateNode.scalar("1")) == "1\n"
    assert _encode(CandidateNode.scalar("plain")) == "plain\n"


@mark_encoders
def test_top_level_scalar_wrapped() -> None:
    """Without unwrapping, scalars keep YAML quoting and no document end marker."""
    assert _encode(CandidateNode.scalar("1"), unwrap_scalar=False) == "'1'\n"
    assert _encode(CandidateNode.scalar("plain"), unwrap_scalar=False) == "plain\n"


@mark_encoders
def test_custom_tag_is_written() -> None:
    """Tags outside the core schema are printed explicitly."""
    node = CandidateNode.mapping([("a", CandidateNode.scalar("v", "!custom"))])
    assert _encode(node) == "a: !custom v\n"


@mark_encoders
def test_custom_tag_quotes_only_when_plain_is_unsafe() -> None:
    """A locally tagged scalar stays plain unless its text needs quoting."""
    node = CandidateNode.mapping(
        [
            ("a", CandidateNode.scalar("x: y", "!custom")),
            ("b", CandidateNode.sequence([CandidateNode.scalar("v", "!custom")])),
        ]
    )
    assert _encode(node) == "a: !custom 'x: y'\nb:\n  - !custom v\n"


@mark_encoders
def test_scalar_styles() -> None:
    """Quoting and block styles carry over."""
    node = CandidateNode.mapping(
        [
            ("d", CandidateNode.scalar("x", style=Style.DOUBLE_QUOTED)),
            ("s", CandidateNode.scalar("y", style=Style.SINGLE_QUOTED)),
            ("l", CandidateNode.scalar("one\ntwo\n", style=Style.LITERAL)),
        ]
    )
    assert _encode(node) == "d: \"x\"\ns: 'y'\nl: |\n  one\n  two\n"


@mark_encoders
def test_flow_style_collections() -> None:
    """Flow-styled collections print inline."""
    seq = CandidateNode.sequence(
        [CandidateNode.scalar("1", INT_TAG), CandidateNode.scalar("2", INT_TAG)], style=Style.FLOW
    )
    assert _encode(CandidateNode.mapping([("a", seq)])) == "a: [1, 2]\n"


@mark_encoders
def test_long_lines_are_not_wrapped() -> None:
    """Long plain scalars stay on one line."""
    text: str = " ".join(["word"] * 40)
    assert _encode(node_from_value({"k": text})) == f"k: {text}\n"


@mark_encoders
def test_unicode_is_written_as_is() -> None:
    """Non-ASCII text is not escaped."""
    assert _encode(node_from_value({"k": "héllo"})) == "k: héllo\n"


@mark_encoders
def test_head_and_foot_comments() -> None:
    """Root head and foot comments surround the document."""
    node = node_from_value({"a": "b"})
    node.head_comment = "# top"
    node.foot_comment = "# bottom"
    assert _encode(node) == "# top\na: b\n# bottom\n"


@mark_encoders
def test_document_separator_preference() -> None:
    """The separator is ``---`` unless disabled."""
    sink = io.BytesIO()
    YamlEncoder(YamlPreferences()).print_document_separator(sink)
    YamlEncoder(YamlPreferences(print_doc_separators=False)).print_document_separator(sink)
    assert sink.getvalue() == b"---\n"


@mark_encoders
def test_leading_content_sentinel_becomes_separator() -> None:
    """Sentinel lines turn into ``---``; other text lines are commented out."""
    content: str = f"# hello\n{DOC_SEPARATOR_SENTINEL}\nfront matter\n"
    assert _leading(content) == "# hello\n---\n# front matter\n"


@mark_encoders
def test_leading_content_keeps_directives() -> None:
    """Directives pass through unchanged and a final newline is added when missing."""
    assert _leading("%YAML 1.2\n") == "%YAML 1.2\n"
    assert _leading("# no newline") == "# no newline\n"
    assert _leading("") == ""


@mark_encoders
def test_leading_content_with_colors_keeps_text() -> None:
    """Coloring never changes the comment text itself."""
    out: str = _leading("# hello\n", colors_enabled=True)
    assert "# hello" in out
    assert out.endswith("\n")


def test_can_handle_aliases() -> None:
    """YAML is the alias-aware format."""
    assert YamlEncoder(YamlPreferences()).can_handle_aliases() is True
