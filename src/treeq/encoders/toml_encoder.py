# topmark:header:start
#
#   project      : TreeQ
#   file         : toml_encoder.py
#   file_relpath : src/treeq/encoders/toml_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML encoder built on tomlkit.

A TOML document is a table, so only top-level mappings are encoded as
documents. Top-level scalars are written raw (one per line), which keeps
``.key`` style queries usable. TOML has no null: a ``!!null`` value anywhere
in the tree raises `EncodeError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import tomlkit

from treeq.config.logging import get_logger
from treeq.core.errors import EncodeError
from treeq.core.node import Kind
from treeq.encoders.base import BaseEncoder, node_to_python, write_comment_block, write_string

if TYPE_CHECKING:
    from treeq.config.logging import TreeqLogger
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable

logger: TreeqLogger = get_logger(__name__)


class TomlEncoder(BaseEncoder):
    """Encoder for TOML output."""

    def print_leading_content(self, sink: Writable, content: str) -> None:
        write_comment_block(sink, content, "#")

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        target: CandidateNode = node.resolved()
        if target.kind is Kind.SCALAR:
            write_string(sink, target.value + "\n")
            return
        if target.kind is not Kind.MAPPING:
            raise EncodeError(
                f"toml encoding requires a map at the top level, got: {target.kind.value}"
            )
        if node.head_comment:
            write_comment_block(sink, node.head_comment, "#")
        write_string(sink, self.dumps(target))

    def dumps(self, node: CandidateNode) -> str:
        """Serialize a mapping node to a TOML document."""
        data: object = node_to_python(node)
        logger.trace("toml data: %r", data)
        try:
            return tomlkit.dumps(data)
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"Cannot encode node as TOML: {exc}") from exc
