# data_loader.py

import io
import logging
import os
from pathlib import Path
from typing import Union

from docx import Document
import fitz  # PyMuPDF

from services.errors import ExtractionError, InputError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = int(os.getenv("RESEARCHMATE_MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TXT_TYPE = "text/plain"

CONTENT_TYPES = {
    PDF_TYPE: ".pdf",
    DOCX_TYPE: ".docx",
    TXT_TYPE: ".txt",
}


def _read_pdf(data: bytes) -> str:
    text_parts = []
    with fitz.open(stream=data, filetype="pdf") as pdf:
        for page in pdf:
            text_parts.append(page.get_text("text"))
    return "\n".join(text_parts)


def _read_docx(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    return "\n".join(p.text for p in doc.paragraphs)


def _read_txt(data: bytes) -> str:
    return data.decode("utf-8", errors="ignore")


_READERS = {
    ".pdf": _read_pdf,
    ".docx": _read_docx,
    ".txt": _read_txt,
}


def detect_kind(filename: str = "", content_type: str = "") -> str:
    """Return the reader suffix for an upload, preferring its content type."""
    content_type = (content_type or "").split(";")[0].strip().lower()
    if content_type in CONTENT_TYPES:
        return CONTENT_TYPES[content_type]
    suffix = Path(filename or "").suffix.lower()
    if suffix in _READERS:
        return suffix
    raise InputError("Invalid file type. Only PDF, DOCX and TXT files are allowed.")


def validate_upload(data: bytes, filename: str = "", content_type: str = "") -> str:
    if not data:
        raise InputError("No file provided")
    kind = detect_kind(filename, content_type)
    if len(data) > MAX_UPLOAD_BYTES:
        limit_mb = MAX_UPLOAD_BYTES / (1024 * 1024)
        raise InputError(f"File size too large. Maximum size is {limit_mb:g}MB.")
    return kind


def extract_text(data: bytes, filename: str = "", content_type: str = "") -> str:
    """
    Return raw text from an uploaded resume payload (.pdf, .docx, .txt).
    """
    kind = validate_upload(data, filename, content_type)
    try:
        text = _READERS[kind](data)
    except Exception as exc:
        logger.warning("Text extraction failed for %s (%s): %s", filename or "upload", kind, exc)
        raise ExtractionError(f"Could not read {kind[1:].upper()} document: {exc}") from exc
    logger.debug("Extracted %d characters from %s", len(text), filename or kind)
    return text.strip()


def load_resume(file_path: Union[str, Path]) -> str:
    """
    Load and return raw text from a resume file (.pdf, .docx, .txt).
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"No such file: {path}")
    return extract_text(path.read_bytes(), filename=path.name)
