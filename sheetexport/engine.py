"""
Export Engine
==============

The whole pipeline in one call:

    CSV text → normalize → parse → Table → serializer → bytes
                                   filename + format → headers

LEARNING POINT: Return, Don't Exit
-------------------------------------
A script-style exporter writes headers, echoes the file and terminates
the process. That makes it impossible to test and impossible to reuse.
export_csv() instead RETURNS everything the caller needs:

    result = export_csv(text, "xml", filename="report.xls")
    if result is None:
        ...                      # empty input: send no file
    else:
        response.body = result.content
        response.headers.update(result.headers.as_dict())

What happens next (writing to a socket, stopping further processing)
is the caller's decision.

LEARNING POINT: No Shared State
----------------------------------
Every call parses its own Table and throws it away afterwards. Nothing
is cached, nothing is global (apart from read-only configuration), so
concurrent requests never need a lock.
"""

from dataclasses import dataclass

from sheetexport.api.headers import (
    DEFAULT_CACHE_CONTROL,
    DEFAULT_LEGACY_PATTERNS,
    ResponseHeaderSet,
    build_headers,
)
from sheetexport.core.classifier import ClassifierPolicy, parse_policy
from sheetexport.core.parser import Table, read_table
from sheetexport.io.config import Config
from sheetexport.io.serializers import SERIALIZERS, ExportFormat, parse_format
from sheetexport.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ExportRequest:
    """The unit of work handed to a serializer."""

    table: Table
    filename: str
    has_header: bool = True


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    headers: ResponseHeaderSet

    @property
    def size(self) -> int:
        return len(self.content)


def default_filename(fmt: "str | ExportFormat", config: Config | None = None) -> str:
    """e.g. "export.xls" for XML Spreadsheet, "export.csv" for CSV."""
    config = config or Config()
    stem = config.get("export.default_filename", "export")
    return f"{stem}.{SERIALIZERS[parse_format(fmt)].extension}"


def export_table(
    request: ExportRequest,
    fmt: "str | ExportFormat",
    client_identity: str | None = None,
    policy: "str | ClassifierPolicy | None" = None,
    config: Config | None = None,
) -> ExportResult | None:
    """
    Serialize an already-parsed table and build its response headers.

    Returns:
        ExportResult, or None if the table is empty (no file, no headers)

    Raises:
        UnsupportedFormatError: Unknown format or classifier policy
        ResourceUnavailableError: The output buffer could not be built
    """
    config = config or Config()
    fmt = parse_format(fmt)
    policy = parse_policy(policy) if policy is not None else None

    serializer = SERIALIZERS[fmt].from_config(config, policy=policy)
    rendered = serializer.render(request.table, has_header=request.has_header)
    if rendered is None:
        logger.debug(f"Nothing to export for {request.filename!r}")
        return None

    headers = build_headers(
        request.filename,
        fmt,
        client_identity,
        legacy_patterns=config.get("headers.legacy_client_patterns", DEFAULT_LEGACY_PATTERNS),
        cache_control=config.get("headers.cache_control") or DEFAULT_CACHE_CONTROL,
    )

    logger.info(
        f"Exported {fmt.value}: {len(request.table)} rows, "
        f"{len(rendered.content)} bytes as {request.filename!r}"
    )
    return ExportResult(rendered.content, headers)


def export_csv(
    csv_text: str,
    fmt: "str | ExportFormat" = ExportFormat.XML_SPREADSHEET,
    filename: str | None = None,
    has_header: bool | None = None,
    client_identity: str | None = None,
    policy: "str | ClassifierPolicy | None" = None,
    config: Config | None = None,
) -> ExportResult | None:
    """
    Convert CSV text into a downloadable spreadsheet.

    Args:
        csv_text: UTF-8 CSV, any line endings
        fmt: "xml", "html", "csv" or "xlsx"
        filename: Download name; defaults to export.<ext> from config
        has_header: Treat the first row as a bold header; default from config
        client_identity: User-Agent of the requesting client
        policy: Classifier policy override; default from config
        config: Config to use instead of the process-wide instance

    Returns:
        ExportResult with bytes and headers, or None for empty input
    """
    config = config or Config()
    fmt = parse_format(fmt)

    if has_header is None:
        has_header = bool(config.get("export.has_header", True))

    table = read_table(csv_text, delimiter=config.get("export.delimiter", ","))
    request = ExportRequest(
        table=table,
        filename=filename or default_filename(fmt, config),
        has_header=has_header,
    )
    return export_table(request, fmt, client_identity, policy=policy, config=config)
