"""FastAPI scan service."""

import logging
import os
import tempfile
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from .exceptions import ParseIntegrityError, ScannerError
from .models import PluginConfig, PluginOutput
from .scanner import BitdefenderScanner

logger = logging.getLogger(__name__)

MISSING_FILE_MESSAGE = "Please supply a valid file to scan.\n"


def create_app(config: PluginConfig, scanner: BitdefenderScanner) -> FastAPI:
    """Create the FastAPI app exposing ``POST /scan``."""

    app = FastAPI(title="Malice Bitdefender AntiVirus Plugin")
    os.makedirs(config.upload_dir, exist_ok=True)

    @app.post("/scan", response_model=None)
    async def scan(malware: Optional[UploadFile] = File(None)):
        """Scan the uploaded ``malware`` file and return the JSON result."""
        if malware is None:
            logger.error("Scan request without a 'malware' upload field")
            return PlainTextResponse(MISSING_FILE_MESSAGE, status_code=400)

        logger.debug(f"Uploaded fileName: {malware.filename}")
        data = await malware.read()

        fd, tmp_path = tempfile.mkstemp(prefix="web_", dir=config.upload_dir)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)

            result = await scanner.run(tmp_path, config.timeout)
        except ScannerError as e:
            logger.error(f"Scan of {malware.filename} failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        except ParseIntegrityError as e:
            logger.error(f"Scan of {malware.filename} returned bad output: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        finally:
            os.remove(tmp_path)

        return PluginOutput(bitdefender=result.without_markdown()).to_dict()

    return app


def serve(config: PluginConfig, scanner: BitdefenderScanner) -> None:
    """Run the scan service with uvicorn (blocks)."""
    app = create_app(config, scanner)
    logger.info(f"web service listening on port :{config.port}")
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
