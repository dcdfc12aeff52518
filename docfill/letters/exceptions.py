from docfill.exceptions import DocumentEngineError


class InvalidLetterRequest(DocumentEngineError):
    """Raised when the caller's field values cannot produce a letter."""

    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message
