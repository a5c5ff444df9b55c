# topmark:header:start
#
#   project      : TreeQ
#   file         : xml_encoder.py
#   file_relpath : src/treeq/encoders/xml_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""XML encoder.

Mapping entries become elements named after their keys:

- keys starting with ``attribute_prefix`` (``+@`` by default) become attributes
  of the enclosing element;
- the ``content_name`` key (``+content``) becomes the element's text;
- a sequence value repeats the element once per item;
- head comments of keys are written as XML comments before the element.

A top-level mapping normally holds a single root element; several top-level
keys are written as sibling elements. Top-level scalars are written as escaped
text.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from treeq.core.errors import EncodeError
from treeq.core.node import NULL_TAG, Kind
from treeq.encoders.base import BaseEncoder, comment_lines, write_string

if TYPE_CHECKING:
    from treeq.config.preferences import XmlPreferences
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable


class XmlEncoder(BaseEncoder):
    """Encoder for XML output."""

    def __init__(self, preferences: XmlPreferences) -> None:
        self.preferences: XmlPreferences = preferences

    def print_leading_content(self, sink: Writable, content: str) -> None:
        for line in comment_lines(content):
            write_string(sink, f"<!-- {_comment_text(line)} -->\n")

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        target: CandidateNode = node.resolved()
        if target.kind is Kind.SCALAR:
            write_string(sink, escape(target.value) + "\n")
            return
        if target.kind is not Kind.MAPPING:
            raise EncodeError(
                f"xml encoding requires a map at the top level, got: {target.kind.value}"
            )

        # A throwaway parent collects the top-level elements and comments.
        holder: ET.Element = ET.Element("holder")
        for key, value in target.pairs():
            self._add_entry(holder, key, value)
        for child in holder:
            if self.preferences.indent > 0:
                ET.indent(child, space=" " * self.preferences.indent)
            child.tail = None
            write_string(sink, ET.tostring(child, encoding="unicode") + "\n")

    def _add_entry(self, parent: ET.Element, key: CandidateNode, value: CandidateNode) -> None:
        name: str = key.resolved().value
        prefix: str = self.preferences.attribute_prefix
        resolved: CandidateNode = value.resolved()

        if name.startswith(prefix):
            if resolved.kind is not Kind.SCALAR:
                raise EncodeError(f"xml attribute '{name}' must be a scalar")
            parent.set(name[len(prefix) :], resolved.value)
            return
        if name == self.preferences.content_name:
            if resolved.kind is not Kind.SCALAR:
                raise EncodeError(f"xml content '{name}' must be a scalar")
            parent.text = resolved.value
            return

        for line in comment_lines(key.head_comment):
            parent.append(ET.Comment(f" {_comment_text(line)} "))
        if resolved.kind is Kind.SEQUENCE:
            for item in resolved.content:
                self._add_element(parent, name, item)
        else:
            self._add_element(parent, name, resolved)

    def _add_element(self, parent: ET.Element, name: str, value: CandidateNode) -> None:
        resolved: CandidateNode = value.resolved()
        element: ET.Element = ET.SubElement(parent, name)
        if resolved.kind is Kind.SCALAR:
            if resolved.tag != NULL_TAG:
                element.text = resolved.value
        elif resolved.kind is Kind.MAPPING:
            for key, child in resolved.pairs():
                self._add_entry(element, key, child)
        else:
            raise EncodeError(f"xml cannot nest an array directly inside array '{name}'")


def _comment_text(text: str) -> str:
    """XML comments may not contain ``--``."""
    return text.replace("--", "- -")
