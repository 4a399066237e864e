import io

import openpyxl
import pytest
from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docchat.logging.logger import Log

DENSE_LINE = "The quarterly report covers revenue, operating costs and headcount by region."


def _pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture(autouse=True, scope="session")
def _configure_logging() -> None:
    Log.configure("DEBUG")


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _pdf([[]])


@pytest.fixture()
def digital_pdf_bytes() -> bytes:
    """Two pages, each well above 100 extractable characters."""
    return _pdf([[DENSE_LINE] * 4, [DENSE_LINE] * 4])


@pytest.fixture()
def sparse_pdf_bytes() -> bytes:
    """Two pages with about 20 characters each, below the scan threshold."""
    return _pdf([["Scanned page 1 of 2"], ["Scanned page 2 of 2"]])


@pytest.fixture()
def long_pdf_bytes() -> bytes:
    """Twenty pages numbered in order."""
    return _pdf([[f"Page {number}"] for number in range(1, 21)])


@pytest.fixture()
def docx_bytes() -> bytes:
    doc = Document()
    doc.add_heading("Project Plan", level=1)
    paragraph = doc.add_paragraph("First milestone is ")
    paragraph.add_run("design review").bold = True
    doc.add_paragraph("Second milestone is launch.")
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture()
def xlsx_bytes() -> bytes:
    """Workbook with sheets Q1 and Q2, in that order."""
    workbook = openpyxl.Workbook()
    q1 = workbook.active
    q1.title = "Q1"
    q1.append(["Region", "Revenue"])
    q1.append(["North", 1200])
    q1.append(["South", 950.5])
    q2 = workbook.create_sheet("Q2")
    q2.append(["Region", "Revenue"])
    q2.append(["North", 1300])
    q2.append(["West, Coast", None])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()
