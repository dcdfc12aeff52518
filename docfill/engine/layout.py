from collections.abc import Iterator

from docfill.engine.geometry import RectConverter
from docfill.engine.models import Rect
from docfill.logging.logger import Log
from docfill.pdf.base import BaseLayoutExtractor
from docfill.pdf.models import PageGeometry, TextRun


class TextLayoutIndex:
    """Text runs of one page with the geometry needed to place overlays."""

    def __init__(self, runs: list[TextRun], geometry: PageGeometry, page_number: int) -> None:
        self.runs = runs
        self.geometry = geometry
        self.page_number = page_number

    @classmethod
    def build(
        cls,
        document_bytes: bytes,
        page_number: int,
        extractor: BaseLayoutExtractor,
    ) -> "TextLayoutIndex":
        """Run the extraction pass for one page.

        The extraction backend is passed in by the caller; nothing about it is
        configured process-wide.

        Raises:
            LayoutExtractionError: if the page cannot be parsed or has no
                text layer. Not retryable.
        """
        layout = extractor.extract(document_bytes, page_number)
        Log.debug("Extracted text runs", page=page_number, runs=len(layout.runs))
        return cls(runs=layout.runs, geometry=layout.geometry, page_number=page_number)

    def rect_of(self, run: TextRun) -> Rect:
        return RectConverter.to_native_rect(run, self.geometry)

    def texts(self) -> list[str]:
        return [run.text for run in self.runs]

    def __iter__(self) -> Iterator[TextRun]:
        return iter(self.runs)

    def __len__(self) -> int:
        return len(self.runs)
