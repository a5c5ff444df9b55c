# topmark:header:start
#
#   project      : TreeQ
#   file         : explode.py
#   file_relpath : src/treeq/core/explode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Alias explosion: inline every anchor/alias reference of a match sequence.

Encoders that cannot represent shared structure (JSON, CSV, TOML, ...) need
their input without aliases. `explode_aliases` rewrites a whole match
sequence at once: aliases become copies of their targets, anchors are dropped
and YAML merge keys (``<<``) are folded into the mapping that holds them.

The input nodes are never mutated; the returned sequence holds fresh copies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from treeq.config.logging import get_logger
from treeq.core.errors import ExplodeError
from treeq.core.node import CandidateNode, Kind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from treeq.config.logging import TreeqLogger

logger: TreeqLogger = get_logger(__name__)


def explode_aliases(matches: Iterable[CandidateNode]) -> list[CandidateNode]:
    """Return exploded copies of ``matches``, preserving their order.

    Args:
        matches (Iterable[CandidateNode]): The ordered match sequence.

    Returns:
        list[CandidateNode]: Copies without any alias, anchor or merge key.

    Raises:
        ExplodeError: If an alias has no target or aliases form a cycle.
    """
    exploded: list[CandidateNode] = [_explode(node, ()) for node in matches]
    logger.debug("Exploded aliases in %d matches", len(exploded))
    return exploded


def _explode(node: CandidateNode, path: tuple[int, ...]) -> CandidateNode:
    """Explode ``node``; ``path`` holds the ids of the nodes being expanded above it."""
    if id(node) in path:
        raise ExplodeError(f"alias cycle detected at {node!r}")
    path = (*path, id(node))

    if node.kind is Kind.ALIAS:
        target: CandidateNode | None = node.alias
        if target is None:
            raise ExplodeError(f"alias '*{node.value}' does not reference an anchored node")
        inlined: CandidateNode = _explode(target, path)
        # The copy takes the alias's place, so it keeps the alias's position data.
        inlined.leading_content = node.leading_content
        inlined.head_comment = node.head_comment or inlined.head_comment
        inlined.line_comment = node.line_comment or inlined.line_comment
        inlined.foot_comment = node.foot_comment or inlined.foot_comment
        inlined.document = node.document
        inlined.file_index = node.file_index
        inlined.filename = node.filename
        return inlined

    if node.kind is Kind.MAPPING:
        return node.copy_with(anchor="", content=_explode_mapping(node, path))

    return node.copy_with(anchor="", content=[_explode(child, path) for child in node.content])


def _explode_mapping(node: CandidateNode, path: tuple[int, ...]) -> list[CandidateNode]:
    """Explode mapping entries and fold merge keys into them.

    Keys written explicitly in the mapping win over merged keys; among merge
    sources the first one listed wins.
    """
    explicit: set[str] = {
        key.resolved().value for key, _ in node.pairs() if not key.is_merge_key()
    }
    emitted: set[str] = set()
    content: list[CandidateNode] = []

    for key, value in node.pairs():
        if key.is_merge_key():
            for source in _merge_sources(value):
                exploded_source: CandidateNode = _explode(source, path)
                if exploded_source.kind is not Kind.MAPPING:
                    raise ExplodeError(
                        f"merge key '<<' expects a mapping or sequence of mappings, "
                        f"got {exploded_source.kind.value}"
                    )
                for merged_key, merged_value in exploded_source.pairs():
                    name: str = merged_key.value
                    if name in explicit or name in emitted:
                        continue
                    emitted.add(name)
                    content.extend((merged_key, merged_value))
            continue

        exploded_key: CandidateNode = _explode(key, path)
        emitted.add(exploded_key.value)
        content.extend((exploded_key, _explode(value, path)))

    return content


def _merge_sources(value: CandidateNode) -> list[CandidateNode]:
    """Return the merge sources a ``<<`` value designates."""
    target: CandidateNode = value.resolved()
    if target.kind is Kind.SEQUENCE:
        return list(target.content)
    return [value]
