# topmark:header:start
#
#   project      : TreeQ
#   file         : base.py
#   file_relpath : src/treeq/encoders/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoder contract and shared helpers.

An encoder serializes one `CandidateNode` into a binary sink. The results
printer drives it per node: it may first ask for a document separator, then
for the node's leading content, and finally for the node itself.

Encoders write UTF-8 text. They never flush: flushing is the printer's job once
the whole record has been written.

Helpers:
    - `write_string`: UTF-8 encode and write text to a sink.
    - `scalar_to_python` / `node_to_python`: convert nodes to plain Python data
      according to their tags, for encoders built on Python serializers.
    - `iter_leaf_paths`: walk a tree and yield ``(path, scalar)`` leaves, for
      flattening encoders (properties, shell variables).
    - `comment_lines`: split free text into comment lines without their ``#``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from treeq.constants import DOC_SEPARATOR_SENTINEL
from treeq.core.errors import EncodeError
from treeq.core.node import BOOL_TAG, FLOAT_TAG, INT_TAG, NULL_TAG, Kind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from treeq.core.node import CandidateNode


@runtime_checkable
class Sink(Protocol):
    """Binary destination the printer hands to encoders."""

    def write(self, data: bytes, /) -> int | None:
        """Write ``data`` to the destination."""
        ...

    def flush(self) -> None:
        """Flush buffered bytes to the underlying destination."""
        ...


class Writable(Protocol):
    """Anything encoders can write to: a `Sink` or an in-memory record buffer."""

    def write(self, data: bytes, /) -> int | None:
        """Write ``data``."""
        ...


class Encoder(Protocol):
    """Capability interface implemented once per output format."""

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        """Serialize ``node`` into ``sink``."""
        ...

    def print_document_separator(self, sink: Writable) -> None:
        """Write the format's native document separator (may be a no-op)."""
        ...

    def print_leading_content(self, sink: Writable, content: str) -> None:
        """Write free text (comments, front matter) that precedes a node."""
        ...

    def can_handle_aliases(self) -> bool:
        """Return True if the format can represent anchors and aliases."""
        ...


class BaseEncoder:
    """Defaults for formats without separators, leading content or aliases.

    Subclasses implement `encode` and override the other hooks when their
    format has a native representation for them.
    """

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        """Serialize ``node`` into ``sink``."""
        raise NotImplementedError

    def print_document_separator(self, sink: Writable) -> None:
        """Formats without multi-document support write nothing."""
        return None

    def print_leading_content(self, sink: Writable, content: str) -> None:
        """Formats without comments drop leading content."""
        return None

    def can_handle_aliases(self) -> bool:
        """Return False: the printer explodes aliases before encoding."""
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def write_string(sink: Writable, text: str) -> None:
    """Write ``text`` to ``sink`` as UTF-8."""
    if text:
        sink.write(text.encode("utf-8"))


def comment_lines(content: str) -> list[str]:
    """Split leading content into comment bodies.

    Blank lines and document-separator sentinel lines are dropped; a leading
    ``#`` (and one following space) is removed.
    """
    out: list[str] = []
    for raw in content.splitlines():
        line: str = raw.strip()
        if not line or line.startswith(DOC_SEPARATOR_SENTINEL):
            continue
        if line.startswith("#"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        out.append(line)
    return out


def write_comment_block(sink: Writable, content: str, prefix: str) -> None:
    """Write each comment line of ``content`` prefixed with ``prefix``."""
    for line in comment_lines(content):
        write_string(sink, f"{prefix} {line}".rstrip() + "\n")


# --- Tag-aware conversion ---


def _parse_int(text: str) -> int:
    cleaned: str = text.replace("_", "")
    sign: int = -1 if cleaned.startswith("-") else 1
    digits: str = cleaned.lstrip("+-")
    if digits.startswith("0o"):
        return sign * int(digits[2:], 8)
    if len(digits) > 1 and digits.startswith("0") and digits.isdigit():
        # YAML 1.1 octal
        return sign * int(digits, 8)
    return sign * int(digits, 0)


def _parse_float(text: str) -> float:
    lowered: str = text.lower()
    if lowered in (".inf", "+.inf"):
        return math.inf
    if lowered == "-.inf":
        return -math.inf
    if lowered == ".nan":
        return math.nan
    return float(text.replace("_", ""))


def scalar_to_python(node: CandidateNode) -> object:
    """Convert a scalar node to a Python value according to its tag.

    Untagged or custom-tagged scalars are returned as strings. A malformed
    ``!!int``/``!!float`` value raises `EncodeError`.
    """
    try:
        if node.tag == NULL_TAG:
            return None
        if node.tag == BOOL_TAG:
            return node.value.lower() in ("true", "yes", "on", "y")
        if node.tag == INT_TAG:
            return _parse_int(node.value)
        if node.tag == FLOAT_TAG:
            return _parse_float(node.value)
    except ValueError as exc:
        raise EncodeError(f"Cannot interpret {node.value!r} as {node.tag}") from exc
    return node.value


def node_to_python(node: CandidateNode) -> object:
    """Convert a node tree to plain Python data (aliases are followed).

    Mapping keys are converted to strings.
    """
    node = node.resolved()
    if node.kind is Kind.SCALAR:
        return scalar_to_python(node)
    if node.kind is Kind.SEQUENCE:
        return [node_to_python(child) for child in node.content]
    if node.kind is Kind.MAPPING:
        return {key.resolved().value: node_to_python(value) for key, value in node.pairs()}
    raise EncodeError(f"Cannot convert unresolved alias '*{node.value}'")


def iter_leaf_paths(
    node: CandidateNode,
    path: tuple[str | int, ...] = (),
) -> Iterator[tuple[tuple[str | int, ...], CandidateNode]]:
    """Yield ``(path, scalar)`` for every scalar leaf below ``node``.

    Sequence positions appear as ``int`` path parts, mapping keys as ``str``.
    Empty collections yield nothing.
    """
    node = node.resolved()
    if node.kind is Kind.SCALAR:
        yield path, node
    elif node.kind is Kind.SEQUENCE:
        for index, child in enumerate(node.content):
            yield from iter_leaf_paths(child, (*path, index))
    elif node.kind is Kind.MAPPING:
        for key, value in node.pairs():
            yield from iter_leaf_paths(value, (*path, key.resolved().value))
