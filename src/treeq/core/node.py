# topmark:header:start
#
#   project      : TreeQ
#   file         : node.py
#   file_relpath : src/treeq/core/node.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Matched node model shared by decoders, the query evaluator and the printer.

A `CandidateNode` is one node of a parsed document tree together with its
provenance: the index of the document it belongs to within its file and the
index of the source file itself. The results printer only reads ``tag``,
``value``, ``leading_content``, ``document`` and ``file_index``; encoders and
alias explosion walk the rest of the tree.

Mappings store their entries in ``content`` as alternating key and value nodes
(``[k0, v0, k1, v1, ...]``); use `CandidateNode.pairs` to iterate them.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


NULL_TAG: Final[str] = "!!null"
BOOL_TAG: Final[str] = "!!bool"
INT_TAG: Final[str] = "!!int"
FLOAT_TAG: Final[str] = "!!float"
STR_TAG: Final[str] = "!!str"
MAP_TAG: Final[str] = "!!map"
SEQ_TAG: Final[str] = "!!seq"
MERGE_TAG: Final[str] = "!!merge"

MERGE_KEY: Final[str] = "<<"


class Kind(Enum):
    """Structural kind of a node."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    ALIAS = "alias"


class Style(Enum):
    """Presentation style hint carried over from the decoder."""

    PLAIN = "plain"
    DOUBLE_QUOTED = "double_quoted"
    SINGLE_QUOTED = "single_quoted"
    LITERAL = "literal"
    FOLDED = "folded"
    FLOW = "flow"


@dataclass(eq=False)
class CandidateNode:
    """A node of a document tree tagged with document and file provenance.

    Attributes:
        kind: Structural kind of the node.
        tag: YAML-style short tag (``!!str``, ``!!int``, ``!!map``, or a custom tag).
        value: Scalar text; for aliases the anchor name being referenced.
        content: Child nodes. Mappings alternate key and value nodes.
        anchor: Anchor name defined on this node (empty when none).
        alias: Target node of an alias (``kind == Kind.ALIAS``).
        style: Presentation style hint.
        leading_content: Free text (comments, front matter, directives) that
            precedes the node in its source; may start with
            `treeq.constants.DOC_SEPARATOR_SENTINEL`.
        head_comment: Comment lines attached above the node.
        line_comment: Comment on the same line as the node.
        foot_comment: Comment lines attached below the node.
        document: Index of the document within its source file.
        file_index: Index of the source file among all inputs.
        filename: Name of the source file (empty for stdin or synthetic nodes).
    """

    kind: Kind
    tag: str = ""
    value: str = ""
    content: list[CandidateNode] = field(default_factory=list)
    anchor: str = ""
    alias: CandidateNode | None = None
    style: Style = Style.PLAIN
    leading_content: str = ""
    head_comment: str = ""
    line_comment: str = ""
    foot_comment: str = ""
    document: int = 0
    file_index: int = 0
    filename: str = ""

    # --- constructors ---

    @classmethod
    def scalar(cls, value: str, tag: str = STR_TAG, **kwargs: object) -> CandidateNode:
        """Create a scalar node."""
        return cls(kind=Kind.SCALAR, tag=tag, value=value, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def sequence(cls, items: Iterable[CandidateNode], **kwargs: object) -> CandidateNode:
        """Create a sequence node from child nodes."""
        return cls(kind=Kind.SEQUENCE, tag=SEQ_TAG, content=list(items), **kwargs)  # type: ignore[arg-type]

    @classmethod
    def mapping(
        cls,
        pairs: Iterable[tuple[str | CandidateNode, CandidateNode]],
        **kwargs: object,
    ) -> CandidateNode:
        """Create a mapping node from ``(key, value)`` pairs.

        String keys are wrapped into ``!!str`` scalar nodes.
        """
        content: list[CandidateNode] = []
        for key, value in pairs:
            content.append(key if isinstance(key, CandidateNode) else cls.scalar(key))
            content.append(value)
        return cls(kind=Kind.MAPPING, tag=MAP_TAG, content=content, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def alias_to(cls, target: CandidateNode, **kwargs: object) -> CandidateNode:
        """Create an alias node referencing ``target`` (which must carry an anchor)."""
        return cls(kind=Kind.ALIAS, value=target.anchor, alias=target, **kwargs)  # type: ignore[arg-type]

    # --- accessors ---

    def pairs(self) -> Iterator[tuple[CandidateNode, CandidateNode]]:
        """Yield ``(key, value)`` pairs of a mapping node."""
        it = iter(self.content)
        return zip(it, it)

    def resolved(self) -> CandidateNode:
        """Return the node an alias chain ends at (``self`` for non-aliases)."""
        node: CandidateNode = self
        seen: set[int] = set()
        while node.kind is Kind.ALIAS and node.alias is not None:
            if id(node) in seen:
                break
            seen.add(id(node))
            node = node.alias
        return node

    def is_merge_key(self) -> bool:
        """Return True if this mapping key is a YAML merge key (``<<``)."""
        return self.kind is Kind.SCALAR and (
            self.tag == MERGE_TAG or (self.value == MERGE_KEY and self.style is Style.PLAIN)
        )

    def copy_with(self, **changes: object) -> CandidateNode:
        """Return a shallow copy of this node with ``changes`` applied."""
        return replace(self, **changes)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        if self.kind is Kind.SCALAR:
            body = f"{self.tag} {self.value!r}"
        elif self.kind is Kind.ALIAS:
            body = f"*{self.value}"
        else:
            body = f"{self.tag} len={len(self.content)}"
        anchor = f" &{self.anchor}" if self.anchor else ""
        return (
            f"CandidateNode({self.kind.value}{anchor} {body} "
            f"doc={self.document} file={self.file_index})"
        )


def node_from_value(value: object, **kwargs: object) -> CandidateNode:
    """Build a node tree from plain Python data.

    Conversions:
      - ``None`` -> ``!!null`` scalar ``null``
      - ``bool`` -> ``!!bool`` scalar ``true`` / ``false``
      - ``int`` -> ``!!int``; ``float`` -> ``!!float``; ``str`` -> ``!!str``
      - ``Mapping`` -> mapping (keys stringified); list/tuple -> sequence

    Keyword arguments (e.g. ``document``, ``file_index``, ``leading_content``)
    apply to the root node only.

    Args:
        value (object): Plain Python data.
        **kwargs (object): Attributes applied to the root node.

    Returns:
        CandidateNode: The root of the converted tree.

    Raises:
        TypeError: If ``value`` contains an unsupported type.
    """
    if value is None:
        node = CandidateNode.scalar("null", NULL_TAG)
    elif isinstance(value, bool):
        node = CandidateNode.scalar("true" if value else "false", BOOL_TAG)
    elif isinstance(value, int):
        node = CandidateNode.scalar(str(value), INT_TAG)
    elif isinstance(value, float):
        node = CandidateNode.scalar(_float_text(value), FLOAT_TAG)
    elif isinstance(value, str):
        node = CandidateNode.scalar(value, STR_TAG)
    elif isinstance(value, Mapping):
        node = CandidateNode.mapping(
            (str(k), node_from_value(v))
            for k, v in value.items()  # pyright: ignore[reportUnknownVariableType]
        )
    elif isinstance(value, (list, tuple)):
        node = CandidateNode.sequence(
            node_from_value(v) for v in value  # pyright: ignore[reportUnknownVariableType]
        )
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to a node")
    for name, attr in kwargs.items():
        setattr(node, name, attr)
    return node


def _float_text(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    return repr(value)
