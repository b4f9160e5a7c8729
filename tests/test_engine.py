"""
Tests for the Export Engine
==============================
End-to-end: CSV text in, bytes and headers out.
"""

import codecs
import io
import xml.etree.ElementTree as ET

import openpyxl
import pytest

from sheetexport import ExportFormat, ExportRequest, export_csv
from sheetexport.core.errors import ResourceUnavailableError, UnsupportedFormatError
from sheetexport.engine import default_filename, export_table
from sheetexport.io.serializers import XmlSpreadsheetSerializer

SS = "{urn:schemas-microsoft-com:office:spreadsheet}"

EXAMPLE = '"製品名","価格"\n"PC",150000\n"01-TEST",100'


def data_types(content: bytes) -> list[list[str]]:
    root = ET.fromstring(content)
    return [
        [data.get(f"{SS}Type") for data in row.iter(f"{SS}Data")]
        for row in root.iter(f"{SS}Row")
    ]


def test_export_example_to_xml():
    result = export_csv(EXAMPLE, "xml", filename="製品リスト.xls", has_header=True)

    assert result is not None
    assert data_types(result.content) == [
        ["String", "String"],
        ["String", "Number"],
        ["String", "Number"],
    ]
    assert 'ss:StyleID="sHeader"><Data ss:Type="String">製品名'.encode() in result.content
    assert result.headers.content_type == "application/vnd.ms-excel; charset=UTF-8"
    assert "filename*=UTF-8''" in result.headers.content_disposition
    assert result.size == len(result.content)


@pytest.mark.parametrize("fmt", list(ExportFormat))
@pytest.mark.parametrize("text", ["", "   ", "\r\n\r\n", "\n \n"])
def test_empty_input_is_a_no_op(fmt, text):
    assert export_csv(text, fmt) is None


def test_export_table_empty():
    request = ExportRequest(table=[], filename="x.xls")
    assert export_table(request, "xml") is None


@pytest.mark.parametrize(
    "fmt, expected",
    [("xml", "export.xls"), ("html", "export.xls"), ("csv", "export.csv"), ("xlsx", "export.xlsx")],
)
def test_default_filename(fmt, expected):
    assert default_filename(fmt) == expected


def test_default_filename_from_config(config):
    config.set("export.default_filename", "report")
    result = export_csv("a\n1", "csv")
    assert 'filename="report.csv"' in result.headers.content_disposition


def test_leading_zeros_survive_every_format():
    """'00123' is never turned into 123, whatever the format."""
    text = "code\n00123"

    xml = export_csv(text, "xml").content
    assert b'<Data ss:Type="String">00123</Data>' in xml

    html = export_csv(text, "html").content.decode("utf-8-sig")
    assert "<td style=\"mso-number-format:'\\@';\">00123</td>" in html

    csv_text = export_csv(text, "csv").content.decode("utf-8-sig")
    assert csv_text == "code\r\n00123\r\n"

    ws = openpyxl.load_workbook(io.BytesIO(export_csv(text, "xlsx").content)).active
    assert ws["A2"].value == "00123"


def test_bom_markers():
    assert export_csv("a", "html").content.startswith(codecs.BOM_UTF8)
    assert export_csv("a", "csv").content.startswith(codecs.BOM_UTF8)
    assert export_csv("a", "xml").content.startswith(b'<?xml version="1.0" encoding="UTF-8"?>')


def test_policy_argument_overrides_config():
    result = export_csv("00123", "xml", has_header=False, policy="length_only")
    assert data_types(result.content) == [["Number"]]


def test_policy_from_config(config):
    config.set("classifier.policy", "length_only")
    result = export_csv("00123", "xml", has_header=False)
    assert data_types(result.content) == [["Number"]]


def test_has_header_from_config(config):
    config.set("export.has_header", False)
    result = export_csv("2024\n1", "xml")
    assert data_types(result.content) == [["Number"], ["Number"]]


def test_sheet_name_from_config(config):
    config.set("export.sheet_name", "売上")
    assert 'ss:Name="売上"'.encode() in export_csv("a", "xml").content


def test_xlsx_numbers_from_config(config):
    config.set("export.xlsx_numbers", True)
    ws = openpyxl.load_workbook(io.BytesIO(export_csv("price\n150000", "xlsx").content)).active
    assert ws["A2"].value == 150000


def test_legacy_client_from_config(config):
    config.set("headers.legacy_client_patterns", [r"OldBot/"])
    result = export_csv("a", "csv", filename="a.csv", client_identity="OldBot/2.0")
    assert result.headers.content_disposition == 'attachment; filename="a.csv"'


def test_unknown_format():
    with pytest.raises(UnsupportedFormatError):
        export_csv("a", "pdf")


def test_unknown_policy():
    with pytest.raises(UnsupportedFormatError):
        export_csv("a", "xml", policy="guess")


def test_buffer_failure_is_resource_unavailable(monkeypatch):
    def out_of_memory(self, table, has_header):
        raise MemoryError("cannot allocate")

    monkeypatch.setattr(XmlSpreadsheetSerializer, "_render", out_of_memory)

    with pytest.raises(ResourceUnavailableError):
        export_csv("a,b", "xml")


def test_exports_do_not_share_state():
    first = export_csv("a\n1", "xml")
    second = export_csv("b\n2", "xml")
    assert b"<Data ss:Type=\"String\">a</Data>" in first.content
    assert b">a<" not in second.content
