"""
XML Spreadsheet 2003 Serializer
==================================

Writes the XML dialect Excel has read since Office 2003. It is plain
text, so no binary encoder is needed, and unlike an HTML table saved as
.xls it does not trigger the "file format and extension don't match"
warning.

LEARNING POINT: Explicit Cell Types
--------------------------------------
Every cell carries its own type:

    <Cell><Data ss:Type="Number">150000</Data></Cell>
    <Cell ss:StyleID="sText"><Data ss:Type="String">00123</Data></Cell>

Because the type is written down, Excel does not guess. The sText style
also sets the "@" (text) number format, so the cell stays text when the
user edits it later.
"""

import re
from html import escape

from sheetexport.core.classifier import CellKind
from sheetexport.core.parser import Row, Table
from sheetexport.io.serializers.base import ExportFormat, TableSerializer, sheet_title

# Control characters XML 1.0 does not allow, even as character references
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f]")

_WORKBOOK_OPEN = """\
<?xml version="1.0" encoding="UTF-8"?>
<?mso-application progid="Excel.Sheet"?>
<Workbook xmlns="urn:schemas-microsoft-com:office:spreadsheet"
 xmlns:o="urn:schemas-microsoft-com:office:office"
 xmlns:x="urn:schemas-microsoft-com:office:excel"
 xmlns:ss="urn:schemas-microsoft-com:office:spreadsheet"
 xmlns:html="http://www.w3.org/TR/REC-html40">
 <Styles>
  <Style ss:ID="Default" ss:Name="Normal">
   <Alignment ss:Vertical="Bottom"/>
   <Borders/>
   <Font ss:FontName="Calibri" x:Family="Swiss" ss:Size="11" ss:Color="#000000"/>
   <Interior/>
   <NumberFormat/>
   <Protection/>
  </Style>
  <Style ss:ID="sHeader">
   <Font ss:FontName="Calibri" x:Family="Swiss" ss:Size="11" ss:Color="#000000" ss:Bold="1"/>
  </Style>
  <Style ss:ID="sText">
   <NumberFormat ss:Format="@"/>
  </Style>
 </Styles>
"""

_WORKBOOK_CLOSE = """\
  </Table>
 </Worksheet>
</Workbook>
"""


def _xml_text(text: str) -> str:
    """Escape cell text, keeping embedded newlines as line breaks inside the cell."""
    return escape(_ILLEGAL_XML_CHARS.sub("", text)).replace("\n", "&#10;")


class XmlSpreadsheetSerializer(TableSerializer):
    format = ExportFormat.XML_SPREADSHEET
    content_type = "application/vnd.ms-excel; charset=UTF-8"
    extension = "xls"

    def __init__(self, sheet_name: str = "Sheet1", **kwargs):
        super().__init__(**kwargs)
        self.sheet_name = sheet_name

    @classmethod
    def _config_options(cls, config) -> dict:
        options = super()._config_options(config)
        options["sheet_name"] = config.get("export.sheet_name", "Sheet1")
        return options

    def _render(self, table: Table, has_header: bool) -> bytes:
        parts = [
            _WORKBOOK_OPEN,
            f' <Worksheet ss:Name="{escape(sheet_title(self.sheet_name))}">\n',
            "  <Table>\n",
        ]

        for index, row in enumerate(table):
            parts.append("   <Row>\n")
            if has_header and index == 0:
                parts.extend(self._header_cells(row))
            else:
                parts.extend(self._data_cells(row))
            parts.append("   </Row>\n")

        parts.append(_WORKBOOK_CLOSE)
        return "".join(parts).encode("utf-8")

    @staticmethod
    def _header_cells(row: Row) -> list[str]:
        # Header text is never auto-classified, even "2024" stays a String
        return [
            f'    <Cell ss:StyleID="sHeader"><Data ss:Type="String">{_xml_text(cell)}</Data></Cell>\n'
            for cell in row
        ]

    def _data_cells(self, row: Row) -> list[str]:
        cells = []
        for cell in row:
            if self.classify(cell) is CellKind.NUMBER:
                cells.append(f'    <Cell><Data ss:Type="Number">{_xml_text(cell)}</Data></Cell>\n')
            else:
                cells.append(
                    f'    <Cell ss:StyleID="sText"><Data ss:Type="String">{_xml_text(cell)}</Data></Cell>\n'
                )
        return cells
