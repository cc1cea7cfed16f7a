import io
import logging
import os

from docx import Document as DocxDocument
from pypdf import PdfReader

from errors import ExtractionError, UnsupportedFileType

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ['.pdf', '.docx', '.txt', '.md']

MIME_TYPES = {
    '.pdf': 'application/pdf',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.txt': 'text/plain',
    '.md': 'text/markdown',
}


def from_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return '\n'.join((page.extract_text() or '') for page in reader.pages)


def from_docx(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    return '\n'.join(p.text for p in doc.paragraphs)


def from_text(data: bytes) -> str:
    return data.decode('utf-8', errors='ignore')


_EXTRACTORS = {'.pdf': from_pdf, '.docx': from_docx, '.txt': from_text, '.md': from_text}


def check_extension(filename: str) -> str:
    ext = os.path.splitext(filename or '')[1].lower()
    if ext not in _EXTRACTORS:
        raise UnsupportedFileType(
            f"Unsupported file type: {ext or '(none)'}. Supported types are: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return ext


def extract_text(data: bytes, filename: str) -> str:
    ext = check_extension(filename)
    try:
        text = _EXTRACTORS[ext](data)
    except Exception as e:
        logger.error(f"Text extraction failed for {filename}: {e}")
        raise ExtractionError(f"Failed to extract text: {e}") from e
    if not text.strip():
        raise ExtractionError("No text content could be extracted from the file")
    return text
