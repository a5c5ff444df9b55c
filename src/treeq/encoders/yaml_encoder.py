# topmark:header:start
#
#   project      : TreeQ
#   file         : yaml_encoder.py
#   file_relpath : src/treeq/encoders/yaml_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""YAML encoder built on PyYAML's serializer and emitter.

The node tree is translated into a PyYAML representation graph (``yaml.Node``)
in which every alias points at the very graph node of its anchor target, so
PyYAML's serializer emits ``&anchor`` / ``*anchor`` pairs by itself. The
serializer is extended to keep the original anchor names, including anchors
that no alias references in the printed output.

Tags follow YAML's implicit resolution: a ``!!str`` scalar that would read
back as a number or boolean is quoted, custom tags are written explicitly.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, Final

import yaml
from yaml.emitter import Emitter
from yaml.resolver import Resolver
from yaml.serializer import Serializer
from yachalk import chalk

from treeq.config.logging import get_logger
from treeq.constants import DOC_SEPARATOR_SENTINEL
from treeq.core.errors import EncodeError
from treeq.core.node import Kind, Style
from treeq.encoders.base import BaseEncoder, write_comment_block, write_string

if TYPE_CHECKING:
    from treeq.config.logging import TreeqLogger
    from treeq.config.preferences import YamlPreferences
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Writable

logger: TreeqLogger = get_logger(__name__)

_TAG_PREFIX: Final[str] = "tag:yaml.org,2002:"
_DEFAULT_MAP_TAG: Final[str] = _TAG_PREFIX + "map"
_DEFAULT_SEQ_TAG: Final[str] = _TAG_PREFIX + "seq"
# Keep long lines intact.
_NO_WRAP: Final[int] = 1 << 30

_SCALAR_STYLES: Final[dict[Style, str | None]] = {
    Style.PLAIN: None,
    Style.DOUBLE_QUOTED: '"',
    Style.SINGLE_QUOTED: "'",
    Style.LITERAL: "|",
    Style.FOLDED: ">",
    Style.FLOW: None,
}


class _AnchorPreservingSerializer(Serializer):
    """Serializer that reuses the source anchor names."""

    def __init__(self, anchor_names: dict[int, str]) -> None:
        Serializer.__init__(self, explicit_start=False, explicit_end=False)
        self._anchor_names: dict[int, str] = anchor_names

    def anchor_node(self, node: yaml.Node) -> None:
        super().anchor_node(node)  # type: ignore[misc]
        name: str | None = self._anchor_names.get(id(node))
        if name:
            self.anchors[node] = name  # type: ignore[attr-defined]

    def generate_anchor(self, node: yaml.Node) -> str:
        return self._anchor_names.get(id(node)) or super().generate_anchor(node)  # type: ignore[misc]


class _NodeDumper(Emitter, _AnchorPreservingSerializer, Resolver):
    """Emitter + serializer + resolver, without a representer.

    Block sequences nested in mappings are indented (``key:\\n  - item``).
    """

    def __init__(self, stream: io.StringIO, *, indent: int, anchor_names: dict[int, str]) -> None:
        Emitter.__init__(self, stream, indent=indent, width=_NO_WRAP, allow_unicode=True)
        _AnchorPreservingSerializer.__init__(self, anchor_names)
        Resolver.__init__(self)

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        super().increase_indent(flow, False)  # type: ignore[misc]

    def choose_scalar_style(self) -> str:
        """Keep plain style for plain-safe scalars written with a local tag (``!custom v``)."""
        event: Any = self.event
        if event.style or event.implicit[0] or not event.tag or event.tag.startswith(_TAG_PREFIX):
            return super().choose_scalar_style()
        if self.analysis is None:
            self.analysis = self.analyze_scalar(event.value)
        analysis: Any = self.analysis
        if self.simple_key_context and (analysis.empty or analysis.multiline):
            return super().choose_scalar_style()
        if self.flow_level:
            plain_ok: bool = analysis.allow_flow_plain
        else:
            plain_ok = analysis.allow_block_plain
        return "" if plain_ok else super().choose_scalar_style()


class _GraphBuilder:
    """Translate a `CandidateNode` tree into a PyYAML node graph."""

    def __init__(self) -> None:
        self.resolver: Resolver = Resolver()
        self.built: dict[int, yaml.Node] = {}
        self.anchor_names: dict[int, str] = {}

    def build(self, node: CandidateNode) -> yaml.Node:
        if node.kind is Kind.ALIAS:
            if node.alias is None:
                raise EncodeError(f"alias '*{node.value}' does not reference an anchored node")
            return self.build(node.alias)

        existing: yaml.Node | None = self.built.get(id(node))
        if existing is not None:
            return existing

        graph_node: yaml.Node
        if node.kind is Kind.SCALAR:
            graph_node = yaml.ScalarNode(
                tag=self._scalar_tag(node),
                value=node.value,
                style=_SCALAR_STYLES[node.style],
            )
            self._register(node, graph_node)
        elif node.kind is Kind.SEQUENCE:
            items: list[yaml.Node] = []
            graph_node = yaml.SequenceNode(
                tag=self._collection_tag(node, _DEFAULT_SEQ_TAG),
                value=items,
                flow_style=node.style is Style.FLOW,
            )
            # Registered before the children so that cyclic aliases resolve.
            self._register(node, graph_node)
            items.extend(self.build(child) for child in node.content)
        else:
            entries: list[tuple[yaml.Node, yaml.Node]] = []
            graph_node = yaml.MappingNode(
                tag=self._collection_tag(node, _DEFAULT_MAP_TAG),
                value=entries,
                flow_style=node.style is Style.FLOW,
            )
            self._register(node, graph_node)
            entries.extend((self.build(k), self.build(v)) for k, v in node.pairs())
        return graph_node

    def _register(self, node: CandidateNode, graph_node: yaml.Node) -> None:
        self.built[id(node)] = graph_node
        if node.anchor:
            self.anchor_names[id(graph_node)] = node.anchor

    def _scalar_tag(self, node: CandidateNode) -> str:
        if not node.tag:
            return self.resolver.resolve(yaml.ScalarNode, node.value, (True, False))
        return _expand_tag(node.tag)

    @staticmethod
    def _collection_tag(node: CandidateNode, default: str) -> str:
        return _expand_tag(node.tag) if node.tag else default


def _expand_tag(tag: str) -> str:
    """Expand a ``!!short`` tag to its full ``tag:yaml.org,2002:`` form."""
    if tag.startswith("!!"):
        return _TAG_PREFIX + tag[2:]
    return tag


class YamlEncoder(BaseEncoder):
    """Encoder for YAML output; the only format that keeps anchors and aliases."""

    def __init__(self, preferences: YamlPreferences) -> None:
        self.preferences: YamlPreferences = preferences

    def can_handle_aliases(self) -> bool:
        return True

    def print_document_separator(self, sink: Writable) -> None:
        if self.preferences.print_doc_separators:
            logger.trace("writing document separator")
            write_string(sink, "---\n")

    def print_leading_content(self, sink: Writable, content: str) -> None:
        """Write leading content as YAML comments.

        Lines holding the document-separator sentinel become ``---``; lines
        that are neither comments nor directives (``%YAML``) are commented out.
        """
        last: str = ""
        for line in content.splitlines(keepends=True):
            if DOC_SEPARATOR_SENTINEL in line:
                self.print_document_separator(sink)
                continue
            if line.strip() and not line.startswith("%") and not line.lstrip().startswith("#"):
                line = "# " + line
            if self.preferences.colors_enabled and line.strip():
                body: str = line.rstrip("\r\n")
                line = chalk.gray(body) + line[len(body) :]
            write_string(sink, line)
            last = line
        if last and not last.endswith("\n"):
            write_string(sink, "\n")

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        if node.head_comment:
            write_comment_block(sink, node.head_comment, "#")
        if node.kind is Kind.SCALAR and self.preferences.unwrap_scalar:
            write_string(sink, node.value + "\n")
        else:
            write_string(sink, self.dumps(node))
        if node.foot_comment:
            write_comment_block(sink, node.foot_comment, "#")

    def dumps(self, node: CandidateNode) -> str:
        """Serialize ``node`` to YAML text (without document markers)."""
        builder = _GraphBuilder()
        root: yaml.Node = builder.build(node)
        stream = io.StringIO()
        dumper = _NodeDumper(
            stream,
            indent=self.preferences.indent,
            anchor_names=builder.anchor_names,
        )
        try:
            dumper.open()
            dumper.serialize(root)
            dumper.close()
        except yaml.YAMLError as exc:
            raise EncodeError(f"Cannot encode node as YAML: {exc}") from exc
        finally:
            dumper.dispose()
        text: str = stream.getvalue()
        # Plain top-level scalars leave the stream open-ended.
        if text.endswith("\n...\n"):
            text = text[: -len("...\n")]
        return text
