"""Plain-text extraction from PDF, DOCX and TXT document bytes.

Dispatches on the caller's declared :class:`DocumentType`; the bytes are
never sniffed.  PDFs are read with PyMuPDF (``fitz``) page by page, DOCX
packages with python-docx paragraph by paragraph, and text files with a
strict UTF-8 decode.
"""

from __future__ import annotations

import io

import docx
import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention
import structlog

from docqa.models.document import DocumentType
from docqa.utils.errors import ExtractionFailure

logger = structlog.get_logger(logger_name=__name__)


class TextExtractor:
    """Turns document bytes into a single plain-text string."""

    def extract(self, document_bytes: bytes, declared_type: DocumentType | str) -> str:
        """Extract the text of a document.

        Parameters
        ----------
        document_bytes:
            Raw document content as fetched.
        declared_type:
            Format the caller says the bytes are in.

        Returns
        -------
        str
            Extracted text.  May be empty for a document with no text layer.

        Raises
        ------
        UnsupportedTypeError
            If *declared_type* is not pdf, docx, or txt.
        ExtractionFailure
            If the bytes cannot be parsed as the declared type.
        """
        doc_type = DocumentType.parse(declared_type)

        if doc_type is DocumentType.PDF:
            text = self._extract_pdf(document_bytes)
        elif doc_type is DocumentType.DOCX:
            text = self._extract_docx(document_bytes)
        else:
            text = self._extract_txt(document_bytes)

        logger.info(
            "text_extracted",
            document_type=doc_type.value,
            size_bytes=len(document_bytes),
            text_length=len(text),
        )
        return text

    # ------------------------------------------------------------------
    # Per-format readers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_pdf(document_bytes: bytes) -> str:
        try:
            doc = fitz.open(stream=document_bytes, filetype="pdf")
        except Exception as exc:
            raise ExtractionFailure(message=f"Could not open PDF: {exc}") from exc

        try:
            return "\n".join(page.get_text("text") for page in doc)
        except Exception as exc:
            raise ExtractionFailure(message=f"Could not read PDF text: {exc}") from exc
        finally:
            doc.close()

    @staticmethod
    def _extract_docx(document_bytes: bytes) -> str:
        # python-docx reads the XML inside the DOCX zip archive.
        try:
            document = docx.Document(io.BytesIO(document_bytes))
        except Exception as exc:
            raise ExtractionFailure(message=f"Could not open DOCX: {exc}") from exc
        return "\n".join(para.text for para in document.paragraphs)

    @staticmethod
    def _extract_txt(document_bytes: bytes) -> str:
        try:
            return document_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ExtractionFailure(message=f"Text document is not valid UTF-8: {exc}") from exc
