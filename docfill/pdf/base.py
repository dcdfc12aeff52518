from abc import ABC, abstractmethod

from docfill.pdf.models import PageLayout


class BaseLayoutExtractor(ABC):
    """Contract for all text-layout extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes, page_number: int) -> PageLayout:
        """Extract positioned text runs from one page.

        Args:
            pdf_bytes: Raw PDF file content.
            page_number: 1-based page number.

        Returns:
            PageLayout with the page geometry and its runs in reading order.

        Raises:
            LayoutExtractionError: if the page cannot be parsed or has no
                text layer.
        """
