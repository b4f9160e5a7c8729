"""
Export Errors
==============

The error taxonomy is deliberately small:

  - Empty input is NOT an error. The engine returns None and the caller
    sends no file.
  - Broken quoting is NOT an error. The parser recovers deterministically.
  - A buffer that cannot be allocated IS an error, and a hard one: it
    says something about the machine, not about the CSV.

LEARNING POINT: Exception Hierarchies
----------------------------------------
Give your package one base exception. Callers who don't care about the
details can write `except SheetExportError`, and callers who do can
catch the specific subclass. UnsupportedFormatError also inherits from
ValueError, so code that already catches ValueError keeps working.
"""


class SheetExportError(Exception):
    """Base class for all sheetexport errors."""


class ResourceUnavailableError(SheetExportError):
    """An in-memory output buffer could not be allocated or written."""


class UnsupportedFormatError(SheetExportError, ValueError):
    """The requested output format or classifier policy is unknown."""
