"""
Table serializers, one per output format.

    serializer = get_serializer("xml", sheet_name="売上")
    rendered = serializer.render(table, has_header=True)
"""

from sheetexport.core.errors import UnsupportedFormatError
from sheetexport.io.serializers.base import BOM, ExportFormat, RenderedTable, TableSerializer
from sheetexport.io.serializers.csv_text import CsvSerializer
from sheetexport.io.serializers.html_table import HtmlTableSerializer
from sheetexport.io.serializers.xlsx import XlsxSerializer
from sheetexport.io.serializers.xml_spreadsheet import XmlSpreadsheetSerializer

SERIALIZERS: dict[ExportFormat, type[TableSerializer]] = {
    ExportFormat.XML_SPREADSHEET: XmlSpreadsheetSerializer,
    ExportFormat.HTML_TABLE: HtmlTableSerializer,
    ExportFormat.CSV: CsvSerializer,
    ExportFormat.XLSX: XlsxSerializer,
}


def parse_format(value: "str | ExportFormat") -> ExportFormat:
    """
    Accept "xml", "XML", ExportFormat.XML_SPREADSHEET, ...

    Raises:
        UnsupportedFormatError: If no format matches
    """
    if isinstance(value, ExportFormat):
        return value
    try:
        return ExportFormat(str(value).strip().lower())
    except ValueError:
        supported = ", ".join(f.value for f in ExportFormat)
        raise UnsupportedFormatError(
            f"Unsupported format: {value} (expected one of: {supported})"
        ) from None


def get_serializer(fmt: "str | ExportFormat", **options) -> TableSerializer:
    """Instantiate the serializer for a format with the given options."""
    return SERIALIZERS[parse_format(fmt)](**options)


__all__ = [
    "BOM",
    "CsvSerializer",
    "ExportFormat",
    "HtmlTableSerializer",
    "RenderedTable",
    "SERIALIZERS",
    "TableSerializer",
    "XlsxSerializer",
    "XmlSpreadsheetSerializer",
    "get_serializer",
    "parse_format",
]
