"""Format-specific text extraction backends.

Each backend reports whether it is usable in the current environment so the
content extractor can fail with a clear error instead of crashing on a
missing library. The real backends load their library lazily on first use.
"""

import io
import logging
from typing import Protocol

from models.file_content import SourceFile

logger = logging.getLogger(__name__)


class TextExtractor(Protocol):
    def is_available(self) -> bool: ...

    def extract_text(self, source: SourceFile) -> str: ...


class PaginatedDocument(Protocol):
    page_count: int

    def page_tokens(self, page_number: int) -> list[str]:
        """Text tokens of a page, 1-based, in reading order."""
        ...

    def close(self) -> None: ...


class PaginatedDocExtractor(Protocol):
    def is_available(self) -> bool: ...

    def open(self, data: bytes) -> PaginatedDocument: ...


class StructuredDocExtractor(Protocol):
    def is_available(self) -> bool: ...

    def extract_raw_text(self, data: bytes) -> str: ...


class PlainTextExtractor:
    def is_available(self) -> bool:
        return True

    def extract_text(self, source: SourceFile) -> str:
        return source.read_text()


class _PdfplumberDocument:
    def __init__(self, pdf):
        self._pdf = pdf
        self.page_count = len(pdf.pages)

    def page_tokens(self, page_number: int) -> list[str]:
        page = self._pdf.pages[page_number - 1]
        return [word["text"] for word in page.extract_words()]

    def close(self) -> None:
        self._pdf.close()


class PdfplumberExtractor:
    """Paginated-document backend on top of pdfplumber."""

    def __init__(self):
        self._module = None
        self._load_attempted = False

    def _load(self):
        if not self._load_attempted:
            self._load_attempted = True
            try:
                import pdfplumber

                self._module = pdfplumber
            except ImportError as e:
                logger.warning("PDF backend not available: %s", e)
        return self._module

    def is_available(self) -> bool:
        return self._load() is not None

    def open(self, data: bytes) -> _PdfplumberDocument:
        pdfplumber = self._load()
        return _PdfplumberDocument(pdfplumber.open(io.BytesIO(data)))


class DocxExtractor:
    """Structured-document backend on top of python-docx; formatting is dropped."""

    def __init__(self):
        self._document_cls = None
        self._load_attempted = False

    def _load(self):
        if not self._load_attempted:
            self._load_attempted = True
            try:
                from docx import Document

                self._document_cls = Document
            except ImportError as e:
                logger.warning("DOCX backend not available: %s", e)
        return self._document_cls

    def is_available(self) -> bool:
        return self._load() is not None

    def extract_raw_text(self, data: bytes) -> str:
        Document = self._load()
        doc = Document(io.BytesIO(data))
        return "\n".join(p.text for p in doc.paragraphs)
