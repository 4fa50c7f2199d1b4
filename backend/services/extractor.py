import io
import logging
import re
from typing import Callable, Dict, Iterator

import docx
import fitz  # PyMuPDF
from docx.table import Table

from backend.app.config import MIME_DOC, MIME_DOCX, MIME_PDF, MIME_TEXT

logger = logging.getLogger(__name__)

TextExtractor = Callable[[bytes], str]


class UnsupportedFileType(ValueError):
    """Raised when no extractor is registered for the declared MIME type."""


class ExtractionError(RuntimeError):
    """Raised when a parsing library fails on the uploaded content.

    The message is safe to show to the user; the underlying library error is
    kept as ``__cause__``.
    """


def extract_plain_text(data: bytes) -> str:
    # utf-8-sig drops a leading BOM, matching what browsers do when reading text files.
    return data.decode("utf-8-sig", errors="replace")


def extract_pdf_text(data: bytes) -> str:
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            return "\n".join(page.get_text() for page in doc)
    except Exception as e:
        raise ExtractionError("Failed to extract text from PDF") from e


def _iter_paragraph_text(container) -> Iterator[str]:
    # Body order; table cells are read row by row, nested tables included.
    for block in container.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                for cell in row.cells:
                    yield from _iter_paragraph_text(cell)
        else:
            yield block.text


def extract_docx_text(data: bytes) -> str:
    """
    Extract raw paragraph text from a Word document, tables included.

    Paragraphs are separated by a blank line. Legacy ``.doc`` uploads are routed
    here too; python-docx cannot read them, so they surface as an ExtractionError.
    """
    try:
        document = docx.Document(io.BytesIO(data))
        return "\n\n".join(_iter_paragraph_text(document))
    except Exception as e:
        raise ExtractionError("Failed to extract text from document") from e


EXTRACTORS: Dict[str, TextExtractor] = {
    MIME_TEXT: extract_plain_text,
    MIME_PDF: extract_pdf_text,
    MIME_DOCX: extract_docx_text,
    MIME_DOC: extract_docx_text,
}


def normalize_text(text: str) -> str:
    """CRLF -> LF, collapse 3+ consecutive newlines into one blank line, trim."""
    text = text.replace("\r\n", "\n")
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def extract_text(data: bytes, mime_type: str) -> str:
    """
    Convert an uploaded document into normalized plain text.

    Args:
        data: Raw file content.
        mime_type: The MIME type declared by the client.

    Returns:
        str: The normalized text, possibly empty if the document has no text.

    Raises:
        UnsupportedFileType: No extractor handles ``mime_type``.
        ExtractionError: The parsing library failed.
    """
    extractor = EXTRACTORS.get(mime_type)
    if extractor is None:
        raise UnsupportedFileType(mime_type)

    logger.debug("Extracting %d bytes as %s", len(data), mime_type)
    return normalize_text(extractor(data))
