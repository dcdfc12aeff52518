from docfill.exceptions import DocumentEngineError


class AnchorNotFound(DocumentEngineError):
    """Raised when a required field anchor is absent from the template page."""

    user_message = "Não foi possível posicionar o campo no PDF base."

    def __init__(self, query_name: str, page_number: int | None = None) -> None:
        where = f" on page {page_number}" if page_number is not None else ""
        super().__init__(f"anchor '{query_name}' not found{where}")
        self.query_name = query_name
        self.page_number = page_number


class ComposerRangeError(DocumentEngineError):
    """Raised when a requested page index is outside a source document."""

    user_message = "Não foi possível montar o documento: página inexistente."


class InvalidDocumentError(DocumentEngineError):
    """Raised when bytes handed to the composer are not a readable PDF."""

    user_message = "Verifique o PDF base e o arquivo enviado."
