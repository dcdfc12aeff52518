import io

import pdfplumber

from docfill.pdf.base import BaseLayoutExtractor
from docfill.pdf.exceptions import LayoutExtractionError
from docfill.pdf.models import PageGeometry, PageLayout, TextRun


class PdfPlumberLayoutExtractor(BaseLayoutExtractor):
    """Extracts positioned text runs using pdfplumber."""

    def __init__(self, x_tolerance: float = 3.0, y_tolerance: float = 3.0) -> None:
        self._x_tolerance = x_tolerance
        self._y_tolerance = y_tolerance

    def extract(self, pdf_bytes: bytes, page_number: int) -> PageLayout:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                if page_number < 1 or page_number > len(pdf.pages):
                    raise LayoutExtractionError(
                        f"page {page_number} out of range (document has {len(pdf.pages)})"
                    )
                page = pdf.pages[page_number - 1]
                geometry = PageGeometry.flipped(float(page.width), float(page.height))
                # keep_blank_chars keeps "ACME LTDA" as one run instead of two words
                words = page.extract_words(
                    x_tolerance=self._x_tolerance,
                    y_tolerance=self._y_tolerance,
                    keep_blank_chars=True,
                    use_text_flow=True,
                )
        except LayoutExtractionError:
            raise
        except Exception as exc:
            raise LayoutExtractionError(f"pdfplumber layout extraction failed: {exc}") from exc

        runs = [
            TextRun(
                text=word["text"],
                device_x=float(word["x0"]),
                device_y=float(word["bottom"]),
                device_width=float(word["x1"]) - float(word["x0"]),
                device_height=float(word["bottom"]) - float(word["top"]),
            )
            for word in words
            if word["text"].strip()
        ]
        if not runs:
            raise LayoutExtractionError(f"page {page_number} has no text layer")
        return PageLayout(geometry=geometry, runs=runs)
