# topmark:header:start
#
#   project      : TreeQ
#   file         : properties_encoder.py
#   file_relpath : src/treeq/encoders/properties_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Java-properties encoder.

Every scalar leaf becomes one ``path = value`` line, where the path joins
mapping keys and sequence indices with dots (``a.b.0``), or uses brackets for
indices (``a.b[0]``) when ``use_array_brackets`` is set. Head comments of keys
are kept as ``#`` lines above their entries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from treeq.core.node import Kind
from treeq.encoders.base import BaseEncoder, write_comment_block, write_string

if TYPE_CHECKING:
    from treeq.config.preferences import PropertiesPreferences
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable

_KEY_ESCAPES = str.maketrans({" ": "\\ ", "=": "\\=", ":": "\\:", "\\": "\\\\"})
_VALUE_ESCAPES = str.maketrans({"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"})


class PropertiesEncoder(BaseEncoder):
    """Encoder for ``.properties`` output."""

    def __init__(self, preferences: PropertiesPreferences) -> None:
        self.preferences: PropertiesPreferences = preferences

    def print_leading_content(self, sink: Writable, content: str) -> None:
        write_comment_block(sink, content, "#")

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        target: CandidateNode = node.resolved()
        if target.kind is Kind.SCALAR:
            if self.preferences.unwrap_scalar:
                write_string(sink, target.value + "\n")
            else:
                write_string(sink, self._escape_value(target.value) + "\n")
            return
        self._walk(sink, target, "")

    def _walk(self, sink: Writable, node: CandidateNode, path: str) -> None:
        node = node.resolved()
        if node.kind is Kind.SCALAR:
            separator: str = self.preferences.key_value_separator
            write_string(sink, f"{path}{separator}{self._escape_value(node.value)}\n")
        elif node.kind is Kind.SEQUENCE:
            for index, child in enumerate(node.content):
                if child.head_comment:
                    write_comment_block(sink, child.head_comment, "#")
                self._walk(sink, child, self._index_path(path, index))
        elif node.kind is Kind.MAPPING:
            for key, value in node.pairs():
                if key.head_comment:
                    write_comment_block(sink, key.head_comment, "#")
                name: str = key.resolved().value.translate(_KEY_ESCAPES)
                self._walk(sink, value, f"{path}.{name}" if path else name)

    def _index_path(self, path: str, index: int) -> str:
        if self.preferences.use_array_brackets:
            return f"{path}[{index}]"
        return f"{path}.{index}" if path else str(index)

    @staticmethod
    def _escape_value(value: str) -> str:
        return value.translate(_VALUE_ESCAPES)
