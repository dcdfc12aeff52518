import pymupdf

from docfill.pdf.base import BaseLayoutExtractor
from docfill.pdf.exceptions import LayoutExtractionError
from docfill.pdf.models import PageGeometry, PageLayout, TextRun


class PyMuPdfLayoutExtractor(BaseLayoutExtractor):
    """Extracts positioned text spans using PyMuPDF."""

    def extract(self, pdf_bytes: bytes, page_number: int) -> PageLayout:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if page_number < 1 or page_number > doc.page_count:
                    raise LayoutExtractionError(
                        f"page {page_number} out of range (document has {doc.page_count})"
                    )
                page = doc[page_number - 1]
                inverse = ~page.transformation_matrix
                geometry = PageGeometry(
                    transform=(inverse.a, inverse.b, inverse.c, inverse.d, inverse.e, inverse.f),
                    width=float(page.rect.width),
                    height=float(page.rect.height),
                )
                text_dict = page.get_text("dict")
        except LayoutExtractionError:
            raise
        except Exception as exc:
            raise LayoutExtractionError(f"pymupdf layout extraction failed: {exc}") from exc

        runs: list[TextRun] = []
        for block in text_dict.get("blocks", []):
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text.strip():
                        continue
                    x0, y0, x1, y1 = span["bbox"]
                    runs.append(
                        TextRun(
                            text=text,
                            device_x=float(x0),
                            device_y=float(y1),
                            device_width=float(x1 - x0),
                            device_height=float(y1 - y0),
                        )
                    )
        if not runs:
            raise LayoutExtractionError(f"page {page_number} has no text layer")
        return PageLayout(geometry=geometry, runs=runs)
