"""SheetExport API route modules."""

from sheetexport.api.routes import export

__all__ = ["export"]
