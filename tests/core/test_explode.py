# topmark:header:start
#
#   project      : TreeQ
#   file         : test_explode.py
#   file_relpath : tests/core/test_explode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for alias explosion."""

from __future__ import annotations

import pytest

from treeq.core.errors import ExplodeError
from treeq.core.exit_codes import ExitCode
from treeq.core.explode import explode_aliases
from treeq.core.node import CandidateNode, Kind, node_from_value
from treeq.encoders.base import node_to_python


def _kinds(node: CandidateNode) -> set[Kind]:
    found: set[Kind] = {node.kind}
    for child in node.content:
        found |= _kinds(child)
    return found


def _anchors(node: CandidateNode) -> set[str]:
    found: set[str] = {node.anchor} if node.anchor else set()
    for child in node.content:
        found |= _anchors(child)
    return found


def test_alias_is_replaced_by_copy_of_target() -> None:
    """Aliases disappear; their targets are inlined and anchors dropped."""
    target = node_from_value({"x": 1})
    target.anchor = "base"
    doc = CandidateNode.mapping([("a", target), ("b", CandidateNode.alias_to(target))])

    (exploded,) = explode_aliases([doc])

    assert Kind.ALIAS not in _kinds(exploded)
    assert _anchors(exploded) == set()
    assert node_to_python(exploded) == {"a": {"x": 1}, "b": {"x": 1}}
    values = [value for _, value in exploded.pairs()]
    assert values[0] is not values[1]


def test_input_nodes_are_not_mutated() -> None:
    """Explosion works on copies."""
    target = CandidateNode.scalar("v", anchor="t")
    alias = CandidateNode.alias_to(target)
    doc = CandidateNode.sequence([target, alias])

    explode_aliases([doc])

    assert target.anchor == "t"
    assert doc.content[1] is alias
    assert alias.kind is Kind.ALIAS


def test_top_level_alias_keeps_its_provenance() -> None:
    """An inlined top-level alias keeps the alias's document, file and leading content."""
    target = CandidateNode.scalar("v", anchor="t", document=0, leading_content="# a\n")
    alias = CandidateNode.alias_to(target, document=3, file_index=1, leading_content="# b\n")

    exploded = explode_aliases([target, alias])

    assert [node.value for node in exploded] == ["v", "v"]
    assert (exploded[1].document, exploded[1].file_index) == (3, 1)
    assert exploded[1].leading_content == "# b\n"
    assert exploded[0].leading_content == "# a\n"


def test_order_is_preserved() -> None:
    """The exploded sequence keeps the input order."""
    nodes = [CandidateNode.scalar(str(i)) for i in range(5)]
    assert [node.value for node in explode_aliases(nodes)] == ["0", "1", "2", "3", "4"]


def test_merge_key_is_expanded() -> None:
    """``<<: *base`` folds the base entries in; explicit keys win."""
    base = node_from_value({"name": "base", "size": 1})
    base.anchor = "base"
    doc = CandidateNode.mapping(
        [("<<", CandidateNode.alias_to(base)), ("size", CandidateNode.scalar("2"))]
    )

    (exploded,) = explode_aliases([doc])

    assert node_to_python(exploded) == {"name": "base", "size": "2"}
    assert [key.value for key, _ in exploded.pairs()] == ["name", "size"]


def test_merge_sequence_first_source_wins() -> None:
    """With several merge sources, the first one listed wins."""
    first = node_from_value({"a": "first"})
    first.anchor = "first"
    second = node_from_value({"a": "second", "b": "second"})
    second.anchor = "second"
    sources = CandidateNode.sequence(
        [CandidateNode.alias_to(first), CandidateNode.alias_to(second)]
    )
    doc = CandidateNode.mapping([("<<", sources)])

    (exploded,) = explode_aliases([doc])

    assert node_to_python(exploded) == {"a": "first", "b": "second"}


def test_merge_of_scalar_fails() -> None:
    """Merge sources must be mappings."""
    doc = CandidateNode.mapping([("<<", CandidateNode.scalar("nope"))])

    with pytest.raises(ExplodeError, match="merge key"):
        explode_aliases([doc])


def test_unresolved_alias_fails() -> None:
    """An alias without target cannot be inlined."""
    dangling = CandidateNode(kind=Kind.ALIAS, value="missing")

    with pytest.raises(ExplodeError, match="missing") as excinfo:
        explode_aliases([dangling])
    assert excinfo.value.exit_code == ExitCode.DATA_ERROR


def test_alias_cycle_fails() -> None:
    """A structure containing an alias to one of its ancestors cannot be inlined."""
    loop = CandidateNode.sequence([], anchor="loop")
    loop.content.append(CandidateNode.alias_to(loop))

    with pytest.raises(ExplodeError, match="cycle"):
        explode_aliases([loop])
