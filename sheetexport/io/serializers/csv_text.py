"""CSV re-emission: RFC 4180 quoting, CRLF records, UTF-8 with a BOM."""

import csv
import io

from sheetexport.core.parser import TRIM_CHARS, Table
from sheetexport.io.serializers.base import BOM, ExportFormat, TableSerializer


class CsvSerializer(TableSerializer):
    """
    Re-emit the parsed table as compliant CSV.

    No type classification happens here: CSV has no cell types, and
    whatever opens the file will apply its own rules. The BOM is what
    stops Excel from reading UTF-8 as the local code page.

    Rows with a cell that starts or ends in whitespace are written fully
    quoted, so the table reads back unchanged.
    """

    format = ExportFormat.CSV
    content_type = "text/csv; charset=UTF-8"
    extension = "csv"

    def __init__(self, delimiter: str = ",", **kwargs):
        super().__init__(**kwargs)
        self.delimiter = delimiter

    @classmethod
    def _config_options(cls, config) -> dict:
        options = super()._config_options(config)
        options["delimiter"] = config.get("export.delimiter", ",")
        return options

    def _render(self, table: Table, has_header: bool) -> bytes:
        buffer = io.StringIO()
        buffer.write(BOM)

        options = dict(delimiter=self.delimiter, quotechar='"', lineterminator="\r\n")
        minimal = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, **options)
        quote_all = csv.writer(buffer, quoting=csv.QUOTE_ALL, **options)

        for row in table:
            # Unquoted edge whitespace would be trimmed away on re-import
            if any(cell != cell.strip(TRIM_CHARS) for cell in row):
                quote_all.writerow(row)
            else:
                minimal.writerow(row)

        return buffer.getvalue().encode("utf-8")
