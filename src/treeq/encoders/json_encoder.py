# topmark:header:start
#
#   project      : TreeQ
#   file         : json_encoder.py
#   file_relpath : src/treeq/encoders/json_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""JSON encoder.

Scalars are typed from their tags (see `treeq.encoders.base.scalar_to_python`);
mapping keys become strings. Each node is written as one JSON value followed by
a newline, so a multi-document stream prints as concatenated JSON values.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from treeq.core.errors import EncodeError
from treeq.core.node import STR_TAG, Kind
from treeq.encoders.base import BaseEncoder, node_to_python, write_string

if TYPE_CHECKING:
    from treeq.config.preferences import JsonPreferences
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable


class JsonEncoder(BaseEncoder):
    """Encoder for JSON output."""

    def __init__(self, preferences: JsonPreferences) -> None:
        self.preferences: JsonPreferences = preferences

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        target: CandidateNode = node.resolved()
        if (
            self.preferences.unwrap_scalar
            and target.kind is Kind.SCALAR
            and target.tag in (STR_TAG, "")
        ):
            write_string(sink, target.value + "\n")
            return
        write_string(sink, self.dumps(target) + "\n")

    def dumps(self, node: CandidateNode) -> str:
        """Serialize ``node`` to a JSON string (no trailing newline)."""
        indent: int = self.preferences.indent
        try:
            if indent <= 0:
                return json.dumps(node_to_python(node), ensure_ascii=False, separators=(",", ":"))
            return json.dumps(node_to_python(node), ensure_ascii=False, indent=indent)
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"Cannot encode node as JSON: {exc}") from exc
