import io

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from horizon.util.pdf_utils import is_pdf, merge_pdfs, sanitize_pdf_name


def blank_pdf(pages):
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


@pytest.mark.parametrize(
    "name, expected",
    [
        (None, "merged"),
        ("", "merged"),
        ("notes", "notes"),
        ("notes.pdf", "notes"),
        ("...hidden", "hidden"),
        (".pdf", "merged"),
        ("report.pdf.pdf", "report.pdf"),
    ],
)
def test_sanitize_pdf_name(name, expected):
    assert sanitize_pdf_name(name) == expected


def test_is_pdf():
    assert is_pdf("application/pdf")
    assert is_pdf("application/pdf; charset=binary")
    assert not is_pdf("image/png", "scan.pdf")
    assert is_pdf(None, "Scan.PDF")
    assert not is_pdf(None, "scan.png")


def test_merge_keeps_order_and_pages():
    merged = merge_pdfs([blank_pdf(2), blank_pdf(3)])

    assert len(PdfReader(io.BytesIO(merged)).pages) == 5


def test_merge_rejects_non_pdf():
    with pytest.raises(PdfReadError):
        merge_pdfs([blank_pdf(1), b"not a pdf"])
