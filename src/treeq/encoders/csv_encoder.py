# topmark:header:start
#
#   project      : TreeQ
#   file         : csv_encoder.py
#   file_relpath : src/treeq/encoders/csv_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Delimiter-separated encoder (CSV and TSV).

Accepted shapes:
    - a sequence of scalars: written as a single row;
    - a sequence of sequences of scalars: one row per item;
    - a sequence of mappings: a header row built from the first mapping's keys,
      then one row per mapping (missing keys yield empty cells).
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING

from treeq.core.errors import EncodeError
from treeq.core.node import Kind
from treeq.encoders.base import BaseEncoder, write_string

if TYPE_CHECKING:
    from treeq.config.preferences import CsvPreferences
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable


class CsvEncoder(BaseEncoder):
    """Encoder for CSV/TSV output; the separator comes from the preferences."""

    def __init__(self, preferences: CsvPreferences) -> None:
        self.preferences: CsvPreferences = preferences

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        target: CandidateNode = node.resolved()
        if target.kind is not Kind.SEQUENCE:
            raise EncodeError(
                f"csv encoding only works for arrays, got: {target.kind.value}"
            )
        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self.preferences.separator, lineterminator="\n")
        items: list[CandidateNode] = [child.resolved() for child in target.content]
        kinds: set[Kind] = {item.kind for item in items}

        if not items or kinds == {Kind.SCALAR}:
            writer.writerow([item.value for item in items])
        elif kinds == {Kind.SEQUENCE}:
            writer.writerows(self._row(item) for item in items)
        elif kinds == {Kind.MAPPING}:
            header: list[str] = [key.resolved().value for key, _ in items[0].pairs()]
            writer.writerow(header)
            for item in items:
                cells: dict[str, CandidateNode] = {
                    key.resolved().value: value for key, value in item.pairs()
                }
                writer.writerow(
                    self._cell(cells[name]) if name in cells else "" for name in header
                )
        else:
            raise EncodeError("csv rows must all be arrays, all be objects, or all be scalars")
        write_string(sink, buffer.getvalue())

    def _row(self, node: CandidateNode) -> list[str]:
        return [self._cell(child) for child in node.content]

    @staticmethod
    def _cell(node: CandidateNode) -> str:
        target: CandidateNode = node.resolved()
        if target.kind is not Kind.SCALAR:
            raise EncodeError(f"csv cells must be scalars, got: {target.kind.value}")
        return target.value
