import io
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).parents[1] / "src"))

FAB_STATEMENT_LINES = [
    "First Abu Dhabi Bank PJSC | PO Box 6316 Abu Dhabi | United Arab Emirates",
    "",
    "ACCOUNT STATEMENT",
    "Currency AED",
    "JOHN DOE SMITH                                            AC-NUM 123-456-7890123-45-6",
    "PO Box 12345 Address Street No 123                       IBAN AE-12-345-123-456-7890123-45-6",
    "Dubai Marina Dubai",
    "Dubai,ARE                                     Account Statement FROM 01 JAN 2024 TO 31 JAN 2024",
    "",
    "Sheet no. 1",
    "",
    "DATE VALUE DATE DESCRIPTION DEBIT CREDIT BALANCE",
    "",
    "Balance brought forward 10,000.00",
    "",
    "01 JAN 2024 01 JAN 2024 POS Settlement GROCERY STORE DUBAI AED 150 150.00 9,850.00",
    "02 JAN 2024 02 JAN 2024 ATM Cash Deposit P32-1234 - CDM- Dubai Mall 5,000.00 14,850.00",
    "03 JAN 2024 03 JAN 2024 Transfer From Salary Account 3,500.00 18,350.00",
    "05 JAN 2024 05 JAN 2024 Switch Transaction 1,000.00 17,350.00",
    "05 JAN 2024 05 JAN 2024 SW WDL Chgs 21.00 17,329.00",
    "10 JAN 2024 10 JAN 2024 POS Settlement VAT AED 0.75 0.75 17,328.25",
    "15 JAN 2024 15 JAN 2024 Inward IPP Payment International Transfer 2,000.00 19,328.25",
    "20 JAN 2024 20 JAN 2024 POS Settlement RESTAURANT DUBAI AED 250 250.00 19,078.25",
    "25 JAN 2024 25 JAN 2024 Reverse Charges Refund 50.00 19,128.25",
    "30 JAN 2024 30 JAN 2024 POS Settlement ONLINE SHOPPING USD 100 367.30 18,760.95",
    "",
    "Closing Book Balance 18,760.95",
    "",
    "*** END OF STATEMENT ***",
]


@pytest.fixture
def fab_statement_lines() -> list[str]:
    """A complete FAB statement as extracted lines."""
    return list(FAB_STATEMENT_LINES)


def build_pdf(pages: list[list[tuple[float, float, str]]]) -> bytes:
    """Draw ``(x, y, text)`` runs page by page with reportlab, in the given order."""
    from reportlab.lib.pagesizes import A4
    from reportlab.pdfgen import canvas

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    for runs in pages:
        pdf.setFont("Helvetica", 9)
        for x, y, text in runs:
            pdf.drawString(x, y, text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@pytest.fixture
def make_pdf(tmp_path):
    """Write a reportlab PDF to a temporary file and return its path."""

    def _make_pdf(pages: list[list[tuple[float, float, str]]], filename: str = "statement.pdf") -> Path:
        path = tmp_path / filename
        path.write_bytes(build_pdf(pages))
        return path

    return _make_pdf


@pytest.fixture
def fab_statement_pdf(make_pdf) -> Path:
    """A two-page FAB statement PDF; runs are drawn out of reading order."""
    first_page = [
        (300, 740, "AC-NUM 123-456-7890123-45-6"),
        (40, 740, "JOHN DOE SMITH"),
        (40, 800, "ACCOUNT STATEMENT"),
        (300, 720, "Account Statement FROM 01 JAN 2024 TO 31 JAN 2024"),
        (40, 720, "Dubai,ARE"),
        (40, 680, "DATE VALUE DATE DESCRIPTION DEBIT CREDIT BALANCE"),
        (40, 660, "Balance brought forward 10,000.00"),
        (40, 620, "02 JAN 2024 02 JAN 2024 ATM Cash Deposit"),
        (420, 620, "5,000.00"),
        (500, 620, "14,850.00"),
        (40, 640, "01 JAN 2024 01 JAN 2024 POS Settlement GROCERY"),
        (500, 640, "9,850.00"),
        (420, 640, "150.00"),
    ]
    second_page = [
        (40, 780, "Sheet no. 2"),
        (40, 740, "Closing Book Balance 14,850.00"),
        (40, 760, "05 JAN 2024 05 JAN 2024 Switch Transaction"),
        (420, 760, "1,000.00"),
        (500, 760, "13,850.00"),
    ]
    return make_pdf([first_page, second_page], "fab.pdf")
