# topmark:header:start
#
#   project      : TreeQ
#   file         : __init__.py
#   file_relpath : src/treeq/printing/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Result printing: the output format registry, writer providers and the printer."""

from __future__ import annotations

from treeq.printing.formats import (
    OUTPUT_FORMATS,
    OutputFormat,
    construct_encoder,
    describe_available_formats,
    resolve_output_format,
)
from treeq.printing.printer import ResultsPrinter
from treeq.printing.writers import MultiPrinterWriter, PrinterWriter, SinglePrinterWriter

__all__ = [
    "OUTPUT_FORMATS",
    "MultiPrinterWriter",
    "OutputFormat",
    "PrinterWriter",
    "ResultsPrinter",
    "SinglePrinterWriter",
    "construct_encoder",
    "describe_available_formats",
    "resolve_output_format",
]
