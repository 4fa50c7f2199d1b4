import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
GENERATIVE_LANGUAGE_SCOPE = "https://www.googleapis.com/auth/generative-language"

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

MIME_TEXT = "text/plain"
MIME_PDF = "application/pdf"
MIME_DOC = "application/msword"
MIME_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
ALLOWED_MIME_TYPES = (MIME_TEXT, MIME_PDF, MIME_DOC, MIME_DOCX)


# Read at request time so a changed environment is picked up without a restart.
def get_credentials_base64() -> Optional[str]:
    return os.getenv("GOOGLE_CREDENTIALS_BASE64")


def get_gemini_model() -> str:
    return os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL


def configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
