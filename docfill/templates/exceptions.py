from docfill.exceptions import DocumentEngineError


class TemplateNotFound(DocumentEngineError):
    """Raised when a template fetch fails or returns a non-success status."""

    user_message = "Não foi possível carregar o PDF base."
