# topmark:header:start
#
#   project      : TreeQ
#   file         : test_node.py
#   file_relpath : tests/core/test_node.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the matched node model."""

from __future__ import annotations

import math

import pytest

from tests.conftest import parametrize
from treeq.core.node import (
    BOOL_TAG,
    FLOAT_TAG,
    INT_TAG,
    MERGE_TAG,
    NULL_TAG,
    STR_TAG,
    CandidateNode,
    Kind,
    Style,
    node_from_value,
)


def test_mapping_wraps_string_keys() -> None:
    """String keys become ``!!str`` scalar nodes; pairs come back in order."""
    node = CandidateNode.mapping(
        [("a", CandidateNode.scalar("1", INT_TAG)), ("b", CandidateNode.scalar("x"))]
    )

    keys = [key.value for key, _ in node.pairs()]
    assert keys == ["a", "b"]
    assert all(key.tag == STR_TAG for key, _ in node.pairs())
    assert len(node.content) == 4


def test_resolved_follows_alias_chains() -> None:
    """`resolved` ends at the anchored target, also through nested aliases."""
    target = CandidateNode.scalar("v", anchor="t")
    first = CandidateNode.alias_to(target)
    assert first.value == "t"
    assert first.resolved() is target
    assert target.resolved() is target


def test_resolved_stops_on_unresolved_alias() -> None:
    """An alias without target resolves to itself."""
    dangling = CandidateNode(kind=Kind.ALIAS, value="missing")
    assert dangling.resolved() is dangling


@parametrize(
    ("node", "expected"),
    [
        (CandidateNode.scalar("<<"), True),
        (CandidateNode.scalar("anything", MERGE_TAG), True),
        (CandidateNode.scalar("<<", style=Style.DOUBLE_QUOTED), False),
        (CandidateNode.scalar("key"), False),
    ],
)
def test_is_merge_key(node: CandidateNode, expected: bool) -> None:
    """Plain ``<<`` keys and ``!!merge`` tagged keys are merge keys; quoted ones are not."""
    assert node.is_merge_key() is expected


def test_copy_with_leaves_original_untouched() -> None:
    """`copy_with` returns a new node."""
    node = CandidateNode.scalar("v", anchor="a", document=2)
    copy = node.copy_with(anchor="")
    assert copy is not node
    assert copy.anchor == ""
    assert copy.document == 2
    assert node.anchor == "a"


def test_node_from_value_converts_plain_data() -> None:
    """Python data maps onto tagged nodes."""
    node = node_from_value(
        {"n": None, "b": False, "i": 3, "f": 1.5, "s": "x", "l": [1, "two"]},
        document=1,
        leading_content="# lead\n",
    )

    assert node.kind is Kind.MAPPING
    assert node.document == 1
    assert node.leading_content == "# lead\n"
    values = {key.value: value for key, value in node.pairs()}
    assert (values["n"].tag, values["n"].value) == (NULL_TAG, "null")
    assert (values["b"].tag, values["b"].value) == (BOOL_TAG, "false")
    assert (values["i"].tag, values["i"].value) == (INT_TAG, "3")
    assert (values["f"].tag, values["f"].value) == (FLOAT_TAG, "1.5")
    assert values["s"].tag == STR_TAG
    assert [child.value for child in values["l"].content] == ["1", "two"]
    assert values["l"].document == 0


@parametrize(
    ("value", "text"),
    [(math.inf, ".inf"), (-math.inf, "-.inf"), (math.nan, ".nan")],
)
def test_node_from_value_special_floats(value: float, text: str) -> None:
    """Infinities and NaN use YAML spellings."""
    assert node_from_value(value).value == text


def test_node_from_value_rejects_unknown_types() -> None:
    """Unsupported Python types raise `TypeError`."""
    with pytest.raises(TypeError):
        node_from_value(object())


def test_repr_mentions_provenance() -> None:
    """The repr shows kind, anchor and provenance for log dumps."""
    text = repr(CandidateNode.scalar("v", anchor="a", document=1, file_index=2))
    assert "&a" in text
    assert "doc=1" in text
    assert "file=2" in text
