# topmark:header:start
#
#   project      : TreeQ
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the TreeQ test suite.

Sets up logging for test runs and provides recording fakes for the printer's
collaborators:

- `RecordingSink`: a binary sink that remembers writes and flushes;
- `RecordingEncoder`: an encoder that writes ``<value>\\n`` and logs every call;
- `RecordingWriter`: a writer provider handing out one `RecordingSink` per key.

Notes:
    Tests that change the configured encoder preferences must use the
    `restore_preferences` fixture so later tests see the defaults again.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from treeq.config import logging
from treeq.config.preferences import set_configured_preferences
from treeq.core.node import CandidateNode

if TYPE_CHECKING:
    from treeq.encoders.base import Writable

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.printer`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_printer: DecoratorType[Any] = as_typed_mark(pytest.mark.printer)
mark_encoders: DecoratorType[Any] = as_typed_mark(pytest.mark.encoders)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_treeq_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure TreeQ's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("TREEQ_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def restore_preferences() -> Iterator[None]:
    """Reset the configured encoder preferences to the defaults after the test."""
    yield
    set_configured_preferences(None)


# --- Recording fakes ---------------------------------------------------------


class RecordingSink:
    """Binary sink that records written bytes and flush calls."""

    def __init__(self, name: str = "sink", events: list[str] | None = None) -> None:
        self.name: str = name
        self.data: bytearray = bytearray()
        self.flushes: int = 0
        self.events: list[str] = events if events is not None else []

    def write(self, data: bytes, /) -> int:
        self.data.extend(data)
        self.events.append(f"write:{self.name}")
        return len(data)

    def flush(self) -> None:
        self.flushes += 1
        self.events.append(f"flush:{self.name}")

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")


class RecordingEncoder:
    """Encoder writing ``<value>\\n`` per node, ``---\\n`` separators and raw leading content.

    Args:
        aliases (bool): Value returned by `can_handle_aliases`.
        events (list[str] | None): Shared event log.
    """

    def __init__(self, *, aliases: bool = True, events: list[str] | None = None) -> None:
        self.aliases: bool = aliases
        self.events: list[str] = events if events is not None else []
        self.encoded: list[CandidateNode] = []

    def encode(self, sink: Writable, node: CandidateNode) -> None:
        self.events.append(f"encode:{node.value}")
        self.encoded.append(node)
        sink.write(f"{node.value}\n".encode())

    def print_document_separator(self, sink: Writable) -> None:
        self.events.append("separator")
        sink.write(b"---\n")

    def print_leading_content(self, sink: Writable, content: str) -> None:
        self.events.append(f"leading:{content}")
        if content:
            sink.write(content.encode())

    def can_handle_aliases(self) -> bool:
        return self.aliases


class RecordingWriter:
    """Writer provider with one `RecordingSink` per key (``None`` for the appendix).

    Args:
        key_for (Callable[[CandidateNode], str]): Routing key of a node; the
            default sends every node to the same sink.
        events (list[str] | None): Shared event log.
    """

    def __init__(
        self,
        key_for: Callable[[CandidateNode], str] = lambda node: "main",
        events: list[str] | None = None,
    ) -> None:
        self.key_for: Callable[[CandidateNode], str] = key_for
        self.events: list[str] = events if events is not None else []
        self.sinks: dict[str | None, RecordingSink] = {}
        self.requests: list[CandidateNode | None] = []

    def get_writer(self, node: CandidateNode | None) -> RecordingSink:
        self.requests.append(node)
        key: str | None = None if node is None else self.key_for(node)
        self.events.append(f"get_writer:{key}")
        if key not in self.sinks:
            self.sinks[key] = RecordingSink(str(key), self.events)
        return self.sinks[key]


def scalar(value: str, *, document: int = 0, file_index: int = 0, **kwargs: Any) -> CandidateNode:
    """Return a ``!!str`` scalar with the given provenance."""
    tag: str = kwargs.pop("tag", "!!str")
    return CandidateNode.scalar(
        value, tag, document=document, file_index=file_index, **kwargs
    )
