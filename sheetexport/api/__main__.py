"""
Entry point for the SheetExport API server.
Run with: python -m sheetexport.api
"""

import uvicorn

from sheetexport import __version__
from sheetexport.io.config import Config
from sheetexport.utils.logger import configure_logging, setup_logger

logger = setup_logger(__name__)


def main():
    config = Config()
    configure_logging(config.get("logging.level", "INFO"), config.get("logging.file"))

    host = config.get("server.host", "127.0.0.1")
    port = int(config.get("server.port", 8420))
    logger.info(f"SheetExport API v{__version__} on http://{host}:{port}/api/export")

    uvicorn.run(
        "sheetexport.api.server:app",
        host=host,
        port=port,
        log_level=str(config.get("logging.level", "INFO")).lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
