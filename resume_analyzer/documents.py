"""Resume document text extraction (PDF, DOCX, Markdown, plain text)."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List

import fitz  # PyMuPDF
from docx import Document

from .errors import ExtractionFailure

logger = logging.getLogger(__name__)

MAX_PDF_PAGES = 10
SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".md", ".txt")


def extract_text(content: bytes, filename: str) -> str:
    """Extract plain text from an uploaded resume document.

    Args:
        content: Raw file bytes.
        filename: Original file name; its extension selects the parser.

    Returns:
        The document text, stripped of surrounding whitespace.

    Raises:
        ExtractionFailure: unsupported type, empty or corrupt file, or a
            document that yields no text.
    """
    suffix = Path(filename or "").suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise ExtractionFailure(
            f"Unsupported file format: {suffix or '(none)'}. Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    if not content:
        raise ExtractionFailure("Uploaded file is empty")

    try:
        if suffix == ".pdf":
            text = _parse_pdf(content)
        elif suffix == ".docx":
            text = _parse_docx(content)
        else:
            text = _parse_text(content)
    except ExtractionFailure:
        raise
    except Exception as exc:
        logger.warning("Failed to extract text from %s: %s", filename, exc)
        raise ExtractionFailure(f"Could not read {suffix} document: {exc}") from exc

    text = text.strip()
    if not text:
        raise ExtractionFailure("No text could be extracted from the document")
    return text


def _parse_pdf(content: bytes) -> str:
    """Parse PDF bytes using PyMuPDF, reading at most ``MAX_PDF_PAGES`` pages."""
    text_parts: List[str] = []
    with fitz.open(stream=content, filetype="pdf") as doc:
        if doc.page_count > MAX_PDF_PAGES:
            logger.info("PDF has %d pages; reading the first %d", doc.page_count, MAX_PDF_PAGES)
        for index in range(min(doc.page_count, MAX_PDF_PAGES)):
            text_parts.append(doc.load_page(index).get_text())
    return "\n".join(text_parts)


def _parse_docx(content: bytes) -> str:
    """Parse DOCX bytes using python-docx, including table cells."""
    doc = Document(io.BytesIO(content))
    text_parts = [para.text for para in doc.paragraphs if para.text.strip()]

    for table in doc.tables:
        for row in table.rows:
            row_text = "\t".join(cell.text.strip() for cell in row.cells if cell.text.strip())
            if row_text:
                text_parts.append(row_text)

    return "\n".join(text_parts)


def _parse_text(content: bytes) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExtractionFailure("Text file is not valid UTF-8") from exc
