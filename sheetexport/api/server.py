"""
SheetExport API Server — FastAPI application
==============================================
A thin HTTP wrapper around the export engine. Everything interesting
happens in sheetexport.engine; this module only wires routes.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sheetexport import __version__
from sheetexport.api.routes import export
from sheetexport.io.config import Config

config = Config()

app = FastAPI(title="SheetExport API", version=__version__)

# Browsers hide Content-Disposition from cross-origin scripts unless exposed
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("server.cors_origins", ["*"]),
    allow_methods=["POST"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(export.router, prefix="/api")
