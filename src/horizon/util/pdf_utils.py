"""PDF helpers for the /mergepdf command, built on pypdf."""

from __future__ import annotations

import io
import re
from typing import Iterable, Optional

from pypdf import PdfWriter

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_MERGED_NAME = "merged"


def sanitize_pdf_name(name: Optional[str]) -> str:
    """
    Return the file stem used for a merged PDF.

    A trailing ``.pdf`` and leading dots are stripped; empty names fall back
    to ``merged``.
    """
    stem = re.sub(r"\.pdf$", "", name or DEFAULT_MERGED_NAME)
    stem = re.sub(r"^\.*", "", stem)
    return stem or DEFAULT_MERGED_NAME


def is_pdf(content_type: Optional[str], filename: str = "") -> bool:
    if content_type:
        return content_type.split(";")[0].strip().lower() == PDF_CONTENT_TYPE
    return filename.lower().endswith(".pdf")


def merge_pdfs(documents: Iterable[bytes]) -> bytes:
    """
    Concatenate the given PDF documents, in order, into one document.

    Raises:
        pypdf.errors.PdfReadError: A document is not a readable PDF.
    """
    writer = PdfWriter()
    try:
        for document in documents:
            writer.append(io.BytesIO(document))
        output = io.BytesIO()
        writer.write(output)
    finally:
        writer.close()
    return output.getvalue()
