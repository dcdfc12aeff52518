import pymupdf

from docfill.config.settings import Settings
from docfill.engine.models import PageSource
from docfill.letters.base import BaseLetter
from docfill.letters.exceptions import InvalidLetterRequest
from docfill.letters.fields import ClientFields

CATEGORIES = ("PRATI", "NDS")
MIN_LINE_BUCKET = 4
MAX_LINE_BUCKET = 31


def line_count_bucket(title_count: int) -> int:
    """Templates exist with room for 4 titles and then one per count up to 31."""
    if title_count < 5:
        return MIN_LINE_BUCKET
    return min(title_count, MAX_LINE_BUCKET)


class NotificationLetter(BaseLetter):
    """Extrajudicial notification: company, tax id, date and titles table."""

    draws_table = True

    def __init__(self, fields: ClientFields, category: str) -> None:
        super().__init__(fields)
        self.category = category.strip().upper()

    def validate(self) -> None:
        if self.category not in CATEGORIES:
            raise InvalidLetterRequest(
                f"Categoria inválida '{self.category}'. Use uma de: {', '.join(CATEGORIES)}."
            )
        if not (self.fields.company_name.strip() or self.fields.tax_id.strip() or self.fields.titles):
            raise InvalidLetterRequest("Preencha pelo menos Razão Social, CNPJ ou Títulos.")

    def template_name(self) -> str:
        return f"{self.category}_{line_count_bucket(len(self.fields.titles)):02d}tl.pdf"

    def template_candidates(self, settings: Settings) -> list[str]:
        return [f"{settings.notification_template_dir}/{self.template_name()}"]

    def file_name(self) -> str:
        digits = self.fields.tax_id_digits or "SEM_CNPJ"
        return f"Notificação Extrajudicial - {digits} - {self.category}.pdf"

    def page_sources(
        self,
        base: pymupdf.Document,
        attachment: pymupdf.Document | None,
    ) -> list[PageSource]:
        return [PageSource.all_pages(base)]
