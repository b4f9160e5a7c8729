"""Export route — CSV text in, spreadsheet download out."""

from fastapi import APIRouter, Header, HTTPException, Response
from pydantic import BaseModel

from sheetexport.core.errors import ResourceUnavailableError, UnsupportedFormatError
from sheetexport.engine import export_csv
from sheetexport.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(tags=["export"])


class ExportBody(BaseModel):
    csv: str
    filename: str | None = None
    format: str = "xml"  # "xml", "html", "csv" or "xlsx"
    has_header: bool | None = None
    policy: str | None = None  # "leading_zero_aware" or "length_only"


@router.post("/export")
def export(req: ExportBody, user_agent: str | None = Header(default=None)):
    """Convert CSV to a spreadsheet file download. 204 if there is nothing to export."""
    try:
        result = export_csv(
            req.csv,
            req.format,
            filename=req.filename,
            has_header=req.has_header,
            client_identity=user_agent,
            policy=req.policy,
        )
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ResourceUnavailableError as e:
        logger.error(f"Export failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    if result is None:
        return Response(status_code=204)

    return Response(
        content=result.content,
        media_type=result.headers.content_type,
        headers=result.headers.as_dict(),
    )
