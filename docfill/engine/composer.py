from collections.abc import Sequence

import pymupdf

from docfill.engine.exceptions import ComposerRangeError, InvalidDocumentError
from docfill.engine.models import PageSource
from docfill.logging.logger import Log


class DocumentComposer:
    """Splices pages from loaded documents into a single output PDF."""

    @staticmethod
    def open(data: bytes) -> pymupdf.Document:
        """Load PDF bytes into a document handle owned by the caller."""
        try:
            document = pymupdf.open(stream=data, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise InvalidDocumentError(f"cannot open PDF: {exc}") from exc
        if not document.is_pdf:
            document.close()
            raise InvalidDocumentError("bytes are not a PDF document")
        return document

    def assemble(self, sources: Sequence[PageSource]) -> bytes:
        """Copy the requested pages, in order, and serialize once.

        Every index is validated before anything is copied, so an out-of-range
        request aborts the whole assembly.

        Raises:
            ComposerRangeError: if a page index is outside its document or no
                page was requested at all.
        """
        self._validate(sources)
        output = pymupdf.open()
        try:
            for source in sources:
                for index in source.page_indexes:
                    output.insert_pdf(source.document, from_page=index, to_page=index)
            Log.info("Composed document", pages=output.page_count, sources=len(sources))
            return output.tobytes(garbage=3, deflate=True)
        finally:
            output.close()

    @staticmethod
    def _validate(sources: Sequence[PageSource]) -> None:
        total = 0
        for position, source in enumerate(sources):
            count = source.document.page_count
            for index in source.page_indexes:
                if index < 0 or index >= count:
                    raise ComposerRangeError(
                        f"source {position}: page index {index} out of range (0..{count - 1})"
                    )
            total += len(source.page_indexes)
        if total == 0:
            raise ComposerRangeError("no pages requested")
