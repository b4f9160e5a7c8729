"""
XLSX Serializer (openpyxl)
============================

The one format we do NOT encode ourselves. A real .xlsx is a zip of
XML parts; openpyxl builds it, and this module only states intent:

  - every cell is an explicit text cell ('001' must not become 1)
  - the header row is bold
  - columns are wide enough for their longest value

LEARNING POINT: Styling Intents, Not Styling Code
----------------------------------------------------
We hand openpyxl a table plus a handful of decisions and let it own the
file format. If openpyxl changes how it writes styles.xml, nothing here
changes.

Pass numbers=True (config key export.xlsx_numbers) to let the classifier
mark numeric cells as real numbers instead. The header row always stays
text.
"""

import io
import re
import unicodedata

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from sheetexport.core.classifier import CellKind
from sheetexport.core.parser import Table
from sheetexport.io.serializers.base import ExportFormat, TableSerializer, sheet_title

MAX_COLUMN_WIDTH = 80
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class XlsxSerializer(TableSerializer):
    format = ExportFormat.XLSX
    content_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def __init__(self, sheet_name: str = "Sheet1", numbers: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.sheet_name = sheet_name
        self.numbers = numbers

    @classmethod
    def _config_options(cls, config) -> dict:
        options = super()._config_options(config)
        options["sheet_name"] = config.get("export.sheet_name", "Sheet1")
        options["numbers"] = bool(config.get("export.xlsx_numbers", False))
        return options

    def _render(self, table: Table, has_header: bool) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_title(self.sheet_name)

        bold = Font(bold=True)
        widths: dict[int, int] = {}

        for row_idx, row_data in enumerate(table, 1):
            is_header = has_header and row_idx == 1
            for col_idx, text in enumerate(row_data, 1):
                cell = ws.cell(row=row_idx, column=col_idx)
                if not is_header and self.numbers and self.classify(text) is CellKind.NUMBER:
                    cell.value = _to_number(text)
                else:
                    cell.value = ILLEGAL_CHARACTERS_RE.sub("", text)
                    # Overrides openpyxl's formula detection for "=..."
                    cell.data_type = "s"
                if is_header:
                    cell.font = bold
                widths[col_idx] = max(widths.get(col_idx, 0), _display_width(text))

        for col_idx, width in widths.items():
            ws.column_dimensions[get_column_letter(col_idx)].width = min(width + 2, MAX_COLUMN_WIDTH)

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


def _to_number(text: str) -> int | float:
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    return float(text)


def _display_width(text: str) -> int:
    """Column width in characters; full-width (CJK) characters count double."""
    longest = max(text.split("\n"), key=len, default="")
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in longest)
