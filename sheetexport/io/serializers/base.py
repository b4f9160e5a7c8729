"""
Serializer Base Class
=======================

Every output format implements the same contract:

    render(table, has_header) -> RenderedTable | None

LEARNING POINT: One Interface, Many Formats
----------------------------------------------
Instead of one export function per format (each re-parsing the CSV and
re-deciding cell types in its own slightly different way), each format
is a subclass of TableSerializer. The engine picks one from a registry
and never needs an if/elif chain over formats.

LEARNING POINT: Template Method
----------------------------------
render() is written once here. It handles what is the same for every
format (empty tables, wrapping buffer failures) and calls _render() for
the part that differs. Subclasses only ever implement _render().
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from sheetexport.core.classifier import (
    DEFAULT_POLICY,
    MAX_NUMERIC_LENGTH,
    CellKind,
    ClassifierPolicy,
    classify,
    parse_policy,
)
from sheetexport.core.errors import ResourceUnavailableError
from sheetexport.core.parser import Table
from sheetexport.utils.logger import setup_logger

logger = setup_logger(__name__)

BOM = "\ufeff"

MAX_SHEET_TITLE_LENGTH = 31
# Characters Excel rejects in sheet titles
_INVALID_TITLE_CHARS = re.compile(r"[\\/?*\[\]:]")
_CONTROL_CHARS = re.compile("[\x00-\x1f\x7f]")


def sheet_title(name: str) -> str:
    """
    Make a worksheet name Excel will accept.

    Control characters are dropped, \\ / ? * [ ] : become "_", and the
    result is cut to 31 characters. An empty result falls back to "Sheet1".
    """
    title = _INVALID_TITLE_CHARS.sub("_", _CONTROL_CHARS.sub("", name))
    return title[:MAX_SHEET_TITLE_LENGTH] or "Sheet1"


class ExportFormat(str, Enum):
    XML_SPREADSHEET = "xml"
    HTML_TABLE = "html"
    CSV = "csv"
    XLSX = "xlsx"


@dataclass(frozen=True)
class RenderedTable:
    """Serialized output plus the content type to declare for it."""

    content: bytes
    content_type: str


class TableSerializer(ABC):
    """
    Abstract base class for all table serializers.

    Subclasses set `format`, `content_type` and `extension`, and
    implement _render().
    """

    format: ExportFormat
    content_type: str
    extension: str

    def __init__(
        self,
        policy: ClassifierPolicy = DEFAULT_POLICY,
        max_numeric_length: int = MAX_NUMERIC_LENGTH,
    ):
        self.policy = policy
        self.max_numeric_length = max_numeric_length

    @classmethod
    def from_config(cls, config, **overrides) -> "TableSerializer":
        """Build a serializer from a Config, with keyword overrides on top."""
        options = cls._config_options(config)
        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**options)

    @classmethod
    def _config_options(cls, config) -> dict:
        return {
            "policy": parse_policy(config.get("classifier.policy", DEFAULT_POLICY)),
            "max_numeric_length": int(config.get("classifier.max_numeric_length", MAX_NUMERIC_LENGTH)),
        }

    def classify(self, text: str) -> CellKind:
        return classify(text, self.policy, self.max_numeric_length)

    def render(self, table: Table, has_header: bool = True) -> RenderedTable | None:
        """
        Serialize a table.

        Returns:
            The rendered bytes and content type, or None for an empty
            table. None means "send no file", it is not a failure.

        Raises:
            ResourceUnavailableError: If the output buffer could not be
                allocated or written
        """
        if not table:
            logger.debug(f"Empty table, skipping {self.format.value} render")
            return None

        try:
            content = self._render(table, has_header)
        except (MemoryError, OSError) as e:
            logger.error(f"Output buffer unavailable for {self.format.value}: {e}")
            raise ResourceUnavailableError(
                f"Could not build {self.format.value} output: {e}"
            ) from e

        return RenderedTable(content, self.content_type)

    @abstractmethod
    def _render(self, table: Table, has_header: bool) -> bytes:
        """Produce the complete output for a non-empty table."""
