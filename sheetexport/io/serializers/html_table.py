"""
HTML Table Serializer
=======================

An HTML page with one <table>, served as application/vnd.ms-excel.
Spreadsheet applications open it as a sheet, which makes this the most
forgiving format for older installs.

The content type is intentionally "wrong" (the bytes are HTML). That
label is what makes the browser hand the download to the spreadsheet
application instead of rendering it.

LEARNING POINT: Two Encoding Hints
-------------------------------------
Excel ignores <meta charset> when it opens HTML from disk, and falls
back to the system code page (Shift_JIS on Japanese Windows). The UTF-8
byte-order mark at the very start of the file is the one signal it
reliably honours, so we write both.
"""

from html import escape

from sheetexport.core.classifier import CellKind
from sheetexport.core.parser import Table
from sheetexport.io.serializers.base import BOM, ExportFormat, TableSerializer

_HEADER_STYLE = "font-weight:bold;background-color:#D9D9D9;"
# mso-number-format "@" is Excel's "Text" number format
_TEXT_STYLE = "mso-number-format:'\\@';"

_DOCUMENT_OPEN = """\
<html xmlns:o="urn:schemas-microsoft-com:office:office"
 xmlns:x="urn:schemas-microsoft-com:office:excel"
 xmlns="http://www.w3.org/TR/REC-html40">
<head>
<meta http-equiv="Content-Type" content="text/html; charset=UTF-8">
<meta charset="UTF-8">
</head>
<body>
<table border="1">
"""

_DOCUMENT_CLOSE = """\
</table>
</body>
</html>
"""


class HtmlTableSerializer(TableSerializer):
    format = ExportFormat.HTML_TABLE
    content_type = "application/vnd.ms-excel; charset=UTF-8"
    extension = "xls"

    def _render(self, table: Table, has_header: bool) -> bytes:
        parts = [BOM, _DOCUMENT_OPEN]

        for index, row in enumerate(table):
            if has_header and index == 0:
                cells = [f'<th style="{_HEADER_STYLE}">{_html_text(cell)}</th>' for cell in row]
            else:
                cells = [self._data_cell(cell) for cell in row]
            parts.append("<tr>" + "".join(cells) + "</tr>\n")

        parts.append(_DOCUMENT_CLOSE)
        return "".join(parts).encode("utf-8")

    def _data_cell(self, cell: str) -> str:
        if self.classify(cell) is CellKind.NUMBER:
            return f"<td>{_html_text(cell)}</td>"
        return f'<td style="{_TEXT_STYLE}">{_html_text(cell)}</td>'


def _html_text(text: str) -> str:
    """HTML-escape, turning embedded newlines into in-cell line breaks."""
    return escape(text).replace("\n", '<br style="mso-data-placement:same-cell;">')
