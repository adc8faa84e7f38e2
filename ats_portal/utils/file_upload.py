"""
File Upload Utility - Validate resume uploads and extract their text.

Only PDF is accepted (checked by content type). Max size comes from
settings (5MB by default).

PyPDF2 has shipped two reader interfaces over the years:
- PdfReader(stream).pages[i].extract_text()          (1.28+ / 2.x / 3.x)
- PdfFileReader(stream).getPage(i).extractText()     (legacy)
extract_pdf_text() tries them in that order, so nothing else in the
application has to care which one is installed.
"""

import io
import logging
from typing import Optional

import PyPDF2
from fastapi import UploadFile

from ats_portal.core.config import get_settings
from ats_portal.core.errors import ExtractionError, FileTooLarge, InvalidFileType

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def _reader_factory():
    """Return whichever PyPDF2 reader class this install provides."""
    for name in ("PdfReader", "PdfFileReader"):
        factory = getattr(PyPDF2, name, None)
        if callable(factory):
            return factory
    return None


def _page_text(page) -> Optional[str]:
    for name in ("extract_text", "extractText"):
        method = getattr(page, name, None)
        if callable(method):
            return method()
    raise ExtractionError("PDF Extraction Failed: unsupported PyPDF2 page interface")


def _pages(reader):
    pages = getattr(reader, "pages", None)
    if pages is not None:
        return list(pages)
    get_page = getattr(reader, "getPage", None)
    num_pages = getattr(reader, "numPages", None)
    if callable(get_page) and num_pages is not None:
        return [get_page(i) for i in range(num_pages)]
    raise ExtractionError("PDF Extraction Failed: unsupported PyPDF2 reader interface")


def extract_pdf_text(content: bytes) -> str:
    """
    Extract text from PDF bytes.

    Returns "" for a readable PDF without text. Raises ExtractionError when
    the bytes are not a parseable PDF or the installed PyPDF2 exposes an
    interface we do not recognize.
    """
    factory = _reader_factory()
    if factory is None:
        raise ExtractionError("PDF Extraction Failed: unsupported PyPDF2 version")

    try:
        reader = factory(io.BytesIO(content))
        text_parts = []
        for page in _pages(reader):
            page_text = _page_text(page)
            if page_text:
                text_parts.append(page_text)
    except ExtractionError:
        raise
    except Exception as e:
        logger.warning("PDF extraction failed: %s", e)
        raise ExtractionError(f"PDF Extraction Failed: {e}")
    return "\n".join(text_parts)


async def read_pdf_upload(file: Optional[UploadFile]) -> bytes:
    """
    Validate an uploaded resume and return its bytes.

    Raises:
        InvalidFileType when missing or not a PDF
        FileTooLarge when over the configured size
    """
    if file is None or file.content_type != PDF_CONTENT_TYPE:
        raise InvalidFileType()

    max_mb = get_settings().max_upload_mb
    max_bytes = max_mb * 1024 * 1024
    # Size is known up front for multipart uploads
    if file.size is not None and file.size > max_bytes:
        raise FileTooLarge(f"File too large. Maximum size: {max_mb}MB")

    content = await file.read()
    if len(content) > max_bytes:
        raise FileTooLarge(f"File too large. Maximum size: {max_mb}MB")
    return content
