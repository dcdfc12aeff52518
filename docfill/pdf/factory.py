from docfill.config.settings import Settings
from docfill.pdf.base import BaseLayoutExtractor
from docfill.pdf.pdfplumber_adapter import PdfPlumberLayoutExtractor
from docfill.pdf.pymupdf_adapter import PyMuPdfLayoutExtractor


class LayoutExtractorFactory:
    """Creates the correct layout extractor based on settings."""

    ADAPTERS: dict[str, type[BaseLayoutExtractor]] = {
        "pdfplumber": PdfPlumberLayoutExtractor,
        "pymupdf": PyMuPdfLayoutExtractor,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseLayoutExtractor:
        engine = settings.layout_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown layout engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
