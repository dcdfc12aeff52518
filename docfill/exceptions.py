class DocumentEngineError(Exception):
    """Base exception for every failure surfaced by the document engine.

    ``user_message`` is the human-readable text shown to the operator; the
    exception's own message carries the technical detail for logs.
    """

    user_message: str = "Não foi possível gerar o documento."
