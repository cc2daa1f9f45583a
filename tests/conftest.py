import io

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

REPORT_SENTENCES = [
    "The quarterly report describes steady revenue growth across every region",
    "Operating costs declined because the logistics team renegotiated shipping contracts",
    "Customer retention improved after the support center extended its opening hours",
    "The board approved a new budget for research into renewable packaging materials",
    "Several product lines were retired to focus investment on the strongest brands",
    "Hiring slowed during the summer while managers reviewed staffing requirements",
    "The finance department expects cash reserves to remain healthy through next year",
    "Regional offices reported fewer delays thanks to the upgraded inventory software",
]

RAW_SENTENCES = [
    "Brute force scanning recovers literal text operators from damaged documents",
    "The cross reference table in this file is intentionally missing or corrupt",
    "Every sentence here lives inside a text object between the usual markers",
    "Readers should still see meaningful words even though the parser gave up",
    "Quarterly planning meetings covered budgets, staffing, and delivery schedules",
    "Warehouse managers confirmed that shipments arrived earlier than expected",
]


def _wrap(words: list[str], width: int = 12) -> list[str]:
    return [" ".join(words[i : i + width]) for i in range(0, len(words), width)]


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def report_pdf_bytes() -> bytes:
    """Generate a two-page text PDF with a few hundred words of prose."""
    words = " ".join(f"{sentence}." for sentence in REPORT_SENTENCES * 3).split()
    lines = _wrap(words)
    half = len(lines) // 2
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for page_lines in (lines[:half], lines[half:]):
        y = 720
        for line in page_lines:
            c.drawString(72, y, line)
            y -= 16
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def raw_stream_pdf_bytes() -> bytes:
    """A hand-written PDF body with uncompressed text operators and no xref table."""
    operators = "\n".join(
        f"BT /F1 12 Tf 72 {700 - 20 * index} Td ({sentence}.) Tj ET"
        for index, sentence in enumerate(RAW_SENTENCES)
    )
    body = (
        "%PDF-1.4\n"
        "1 0 obj\n"
        "<< /Type /Catalog /Pages 2 0 R >>\n"
        "endobj\n"
        "4 0 obj\n"
        f"<< /Length {len(operators)} >>\n"
        "stream\n"
        f"{operators}\n"
        "endstream\n"
        "endobj\n"
        "%%EOF\n"
    )
    return body.encode("latin-1")


@pytest.fixture()
def png_bytes() -> bytes:
    """A small white PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), "white").save(buf, format="PNG")
    return buf.getvalue()
