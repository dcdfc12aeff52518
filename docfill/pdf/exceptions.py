from docfill.exceptions import DocumentEngineError


class LayoutExtractionError(DocumentEngineError):
    """Raised when a page has no extractable text layer or cannot be parsed."""

    user_message = "Falha ao ler texto do PDF base."
