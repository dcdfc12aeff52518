import io
from collections.abc import Callable, Sequence

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

# (x, baseline y, text, font, size) in PDF points, origin bottom-left
TextLine = tuple[float, float, str, str, float]

PLACEHOLDER = "ACME LTDA"
PLACEHOLDER_Y = 700.0
TAX_ID_LINE_Y = 676.0
DATE_LINE_Y = 630.0
GREETING_Y = 560.0


def build_pdf(pages: Sequence[Sequence[TextLine]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        for x, y, text, font, size in lines:
            c.setFont(font, size)
            c.drawString(x, y, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def pdf_factory() -> Callable[[Sequence[Sequence[TextLine]]], bytes]:
    return build_pdf


@pytest.fixture()
def letter_template_bytes() -> bytes:
    """Two-page template: company placeholder printed above the tax-id line."""
    return build_pdf(
        [
            [
                (72, PLACEHOLDER_Y, PLACEHOLDER, "Helvetica-Bold", 12),
                (72, TAX_ID_LINE_Y, "CNPJ: 00.000.000/0000-00", "Helvetica-Bold", 12),
                (330, DATE_LINE_Y, "Toledo, 01 de janeiro de 2024", "Helvetica", 11),
                (72, GREETING_Y, "Prezados Senhores,", "Helvetica", 12),
                (72, 530, "Vimos por meio desta notificar os titulos abaixo.", "Helvetica", 11),
            ],
            [
                (72, 740, "Titulos em aberto", "Helvetica", 12),
            ],
        ]
    )


@pytest.fixture()
def tax_id_above_template_bytes() -> bytes:
    """Variant with the tax-id line printed above the company placeholder."""
    return build_pdf(
        [
            [
                (72, 700, "CNPJ: 00.000.000/0000-00", "Helvetica-Bold", 12),
                (72, 676, PLACEHOLDER, "Helvetica-Bold", 12),
                (330, DATE_LINE_Y, "Toledo, 01 de janeiro de 2024", "Helvetica", 11),
                (72, GREETING_Y, "Prezados Senhores,", "Helvetica", 12),
            ]
        ]
    )


@pytest.fixture()
def greeting_only_template_bytes() -> bytes:
    """Template variant without company, tax-id or date lines."""
    return build_pdf(
        [
            [
                (72, GREETING_Y, "Prezados Senhores,", "Helvetica", 12),
                (72, 530, "Vimos por meio desta notificar os titulos abaixo.", "Helvetica", 11),
            ]
        ]
    )


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """A valid PDF with no text layer, like a scanned page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()
