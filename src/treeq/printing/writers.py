# topmark:header:start
#
#   project      : TreeQ
#   file         : writers.py
#   file_relpath : src/treeq/printing/writers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Writer providers: map each printed node to its output sink.

The results printer asks its provider for a sink once per node, and once more
with ``None`` for the appendix. Two providers are available:

- `SinglePrinterWriter` sends everything to one binary stream (usually
  ``sys.stdout.buffer``);
- `MultiPrinterWriter` writes each node to its own file, named by a callback.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol

from treeq.config.logging import get_logger
from treeq.core.errors import PrinterWriterError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from treeq.config.logging import TreeqLogger
    from treeq.core.node import CandidateNode
    from treeq.encoders.base import Sink

logger: TreeqLogger = get_logger(__name__)


class PrinterWriter(Protocol):
    """Provides the sink for a node, or for the appendix when ``node`` is ``None``."""

    def get_writer(self, node: CandidateNode | None) -> Sink:
        """Return the sink that receives ``node``'s output."""
        ...


class SinglePrinterWriter:
    """Route every node (and the appendix) to the same binary stream.

    The stream is not owned: it is never closed by this provider.
    """

    def __init__(self, stream: Sink) -> None:
        self.stream: Sink = stream

    def get_writer(self, node: CandidateNode | None) -> Sink:
        return self.stream


class MultiPrinterWriter:
    """Write each node to ``<directory>/<name>.<extension>``.

    Files are truncated on open. Opening the file for a node closes the file of
    the previous node; the appendix (``node is None``) goes to the most
    recently opened file.

    Args:
        name_for (Callable[[CandidateNode], str]): Computes the file name (without
            extension) for a node.
        directory (Path): Directory receiving the files.
        extension (str): File extension, without the leading dot.
    """

    def __init__(
        self,
        name_for: Callable[[CandidateNode], str],
        *,
        directory: Path = Path("."),
        extension: str = "yml",
    ) -> None:
        self.name_for: Callable[[CandidateNode], str] = name_for
        self.directory: Path = directory
        self.extension: str = extension
        self._current: BinaryIO | None = None
        self._current_path: Path | None = None

    @property
    def current_path(self) -> Path | None:
        """Path of the file currently open, if any."""
        return self._current_path

    def get_writer(self, node: CandidateNode | None) -> Sink:
        """Return the sink for ``node``.

        Raises:
            PrinterWriterError: If the computed name is empty or not a string,
                if the file cannot be opened, or if ``node`` is ``None`` while
                no file has been opened yet.
        """
        if node is None:
            if self._current is None:
                raise PrinterWriterError("No output file is open to receive the appendix")
            return self._current

        name: object = self.name_for(node)
        if not isinstance(name, str) or not name:
            raise PrinterWriterError(f"Output file name must be a non-empty string, got {name!r}")
        path: Path = self.directory / f"{name}.{self.extension}"

        self.close()
        try:
            self._current = path.open("wb")
        except OSError as exc:
            raise PrinterWriterError(f"Cannot open output file {path}: {exc}") from exc
        self._current_path = path
        logger.debug("Writing node to %s", path)
        return self._current

    def close(self) -> None:
        """Close the file currently open, if any."""
        if self._current is not None:
            logger.trace("Closing %s", self._current_path)
            self._current.close()
            self._current = None
            self._current_path = None

    def __enter__(self) -> MultiPrinterWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
