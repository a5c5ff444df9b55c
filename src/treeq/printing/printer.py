# topmark:header:start
#
#   project      : TreeQ
#   file         : printer.py
#   file_relpath : src/treeq/printing/printer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Results printer.

`ResultsPrinter` emits the nodes matched by a query through one encoder into
the sinks handed out by a writer provider. It is stateful across calls: the
document/file indices seen so far decide where document separators go, and
`printed_anything` reports whether any truthy value was printed (for
exit-status decisions).

Per node, the printer:

1. obtains the node's sink from the writer provider;
2. writes a document separator when the node starts a new document or file,
   unless its leading content already begins with
   `treeq.constants.DOC_SEPARATOR_SENTINEL`;
3. writes the leading content and the encoded node, either straight to the
   sink or, in NUL-separated mode, to a record buffer that is checked and
   terminated with a single NUL byte;
4. flushes the sink.

After the last node, an optional appendix stream is copied verbatim to the
sink for ``None``.
"""

from __future__ import annotations

import io
import shutil
from typing import TYPE_CHECKING, BinaryIO

from treeq.config.logging import get_logger
from treeq.constants import APPENDIX_COPY_BUFFER_SIZE, DOC_SEPARATOR_SENTINEL, NUL_BYTE
from treeq.core.errors import NulSeparatorConflictError
from treeq.core.explode import explode_aliases
from treeq.core.node import BOOL_TAG, NULL_TAG

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from treeq.config.logging import TreeqLogger
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Encoder, Sink, Writable
    from treeq.printing.writers import PrinterWriter

logger: TreeqLogger = get_logger(__name__)


def is_printed_value(node: CandidateNode) -> bool:
    """Return True unless ``node`` is ``!!null`` or the boolean ``false``."""
    if node.tag == NULL_TAG:
        return False
    return not (node.tag == BOOL_TAG and node.value == "false")


def remove_last_eol(record: bytearray) -> None:
    """Strip one trailing CRLF, CR or LF from ``record`` in place."""
    if record.endswith(b"\r\n"):
        del record[-2:]
    elif record.endswith((b"\r", b"\n")):
        del record[-1:]


class ResultsPrinter:
    """Print matched nodes with one encoder through a writer provider.

    Args:
        encoder (Encoder): Encoder for the selected output format.
        printer_writer (PrinterWriter): Provides the sink for each node.
        explode (Callable[[list[CandidateNode]], list[CandidateNode]]): Alias
            explosion applied to the whole batch when the encoder cannot
            represent aliases.
    """

    def __init__(
        self,
        encoder: Encoder,
        printer_writer: PrinterWriter,
        *,
        explode: Callable[[list[CandidateNode]], list[CandidateNode]] = explode_aliases,
    ) -> None:
        self.encoder: Encoder = encoder
        self.printer_writer: PrinterWriter = printer_writer
        self.explode: Callable[[list[CandidateNode]], list[CandidateNode]] = explode
        self._first_time_printing: bool = True
        self._previous_doc_index: int = 0
        self._previous_file_index: int = 0
        self._printed_matches: bool = False
        self._appendix: BinaryIO | None = None
        self._nul_sep_output: bool = False

    @property
    def printed_anything(self) -> bool:
        """True once a node other than ``null`` or ``false`` has been printed."""
        return self._printed_matches

    def set_appendix(self, source: BinaryIO | None) -> None:
        """Register a binary stream copied verbatim after the results (``None`` clears it)."""
        self._appendix = source

    def set_nul_sep_output(self, enabled: bool) -> None:
        """Enable or disable NUL-separated records."""
        logger.debug("Setting NUL separator output: %s", enabled)
        self._nul_sep_output = enabled

    def reset(self) -> None:
        """Forget the boundary state and the printed flag, as after construction."""
        self._first_time_printing = True
        self._previous_doc_index = 0
        self._previous_file_index = 0
        self._printed_matches = False

    def print_results(self, matches: Iterable[CandidateNode]) -> None:
        """Print ``matches`` in order, then the appendix if one is set.

        Args:
            matches (Iterable[CandidateNode]): The matched nodes.

        Raises:
            NulSeparatorConflictError: In NUL-separated mode, if a record
                contains a NUL byte.

        Errors from alias explosion, the writer provider, the encoder or the
        sinks propagate unchanged; the first one aborts the call.
        """
        nodes: list[CandidateNode] = list(matches)
        logger.debug("print_results for %d matches", len(nodes))

        if nodes and not self.encoder.can_handle_aliases():
            nodes = self.explode(nodes)

        if not nodes:
            logger.debug("no matching results, nothing to print")
        elif self._first_time_printing:
            self._previous_doc_index = nodes[0].document
            self._previous_file_index = nodes[0].file_index
            self._first_time_printing = False

        for node in nodes:
            self._print_one(node)

        if self._appendix is not None:
            self._pipe_appendix(self._appendix)

    def _print_one(self, node: CandidateNode) -> None:
        logger.debug(
            "print separator logic: previous doc index %d, previous file index %d",
            self._previous_doc_index,
            self._previous_file_index,
        )
        logger.trace("%r", node)
        sink: Sink = self.printer_writer.get_writer(node)

        new_document: bool = (
            self._previous_doc_index != node.document
            or self._previous_file_index != node.file_index
        )
        if new_document and not node.leading_content.startswith(DOC_SEPARATOR_SENTINEL):
            self.encoder.print_document_separator(sink)

        if self._nul_sep_output:
            buffer = io.BytesIO()
            self._encode(buffer, node)
            record = bytearray(buffer.getvalue())
            remove_last_eol(record)
            if NUL_BYTE in record:
                raise NulSeparatorConflictError
            sink.write(bytes(record))
            sink.write(NUL_BYTE)
        else:
            self._encode(sink, node)

        # The file index stays at its primed value.
        self._previous_doc_index = node.document
        sink.flush()

    def _encode(self, destination: Writable, node: CandidateNode) -> None:
        self.encoder.print_leading_content(destination, node.leading_content)
        self._printed_matches = self._printed_matches or is_printed_value(node)
        self.encoder.encode(destination, node)

    def _pipe_appendix(self, source: BinaryIO) -> None:
        sink: Sink = self.printer_writer.get_writer(None)
        logger.debug("Piping appendix")
        shutil.copyfileobj(source, sink, APPENDIX_COPY_BUFFER_SIZE)  # type: ignore[arg-type]
        sink.flush()
