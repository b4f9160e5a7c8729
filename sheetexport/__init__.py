"""
SheetExport - CSV to Spreadsheet Export Engine
================================================

Turns CSV text into byte streams that spreadsheet applications open
without mangling the data (dropped leading zeros, rounded long numbers,
garbled Japanese filenames).

LEARNING POINT: Public API in __init__.py
-------------------------------------------
Callers should not need to know the internal module layout. The names
re-exported here are the whole contract:

    from sheetexport import export_csv, ExportFormat

    result = export_csv(text, ExportFormat.XML_SPREADSHEET, filename="report.xls")
    if result is not None:
        send(result.content, result.headers.as_dict())
"""

__version__ = "0.1.0"
__author__ = "Jazziki17"

from sheetexport.engine import ExportFormat, ExportRequest, ExportResult, export_csv

__all__ = ["ExportFormat", "ExportRequest", "ExportResult", "export_csv"]
