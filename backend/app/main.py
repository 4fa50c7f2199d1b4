import asyncio
import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ALLOWED_MIME_TYPES, MAX_UPLOAD_BYTES, configure_logging
from backend.models.schemas import (
    ClientConfig,
    ErrorResponse,
    ExtractTextResponse,
    SimplificationResult,
    SimplifyRequest,
)
from backend.services import extractor, simplifier

configure_logging()
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"

app = FastAPI(title="PolicySimplifier")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/", include_in_schema=False)
async def index():
    return FileResponse(STATIC_DIR / "index.html")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/api/config", response_model=ClientConfig)
async def client_config():
    return ClientConfig(max_upload_bytes=MAX_UPLOAD_BYTES, allowed_mime_types=list(ALLOWED_MIME_TYPES))


@app.post("/api/extract-text", response_model=ExtractTextResponse, responses=ERROR_RESPONSES)
async def extract_text(file: Optional[UploadFile] = File(None)):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    try:
        data = await file.read()
        if len(data) > MAX_UPLOAD_BYTES:
            raise HTTPException(status_code=400, detail="File size must be less than 10MB")

        try:
            text = await asyncio.to_thread(extractor.extract_text, data, file.content_type or "")
        except extractor.UnsupportedFileType:
            raise HTTPException(status_code=400, detail="Unsupported file type")
        except extractor.ExtractionError as e:
            logger.warning("Extraction failed for %s: %s", file.filename, e.__cause__)
            raise HTTPException(status_code=500, detail=str(e))

        if not text:
            raise HTTPException(status_code=400, detail="No text found in the file")

        return ExtractTextResponse(text=text)

    except HTTPException:
        raise
    except Exception:
        logger.exception("Text extraction error")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/api/simplify", response_model=SimplificationResult, responses=ERROR_RESPONSES)
async def simplify(
    body: SimplifyRequest,
    generate: simplifier.TextGenerator = Depends(simplifier.get_text_generator),
):
    if not isinstance(body.text, str) or not body.text.strip():
        raise HTTPException(status_code=400, detail="Policy text is required")

    try:
        return await asyncio.to_thread(simplifier.simplify_policy, body.text, generate)
    except Exception:
        logger.exception("Simplify request failed")
        raise HTTPException(status_code=500, detail="Internal server error")
