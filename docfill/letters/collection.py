import unicodedata

import pymupdf

from docfill.config.settings import Settings
from docfill.engine.models import PageSource
from docfill.letters.base import BaseLetter
from docfill.letters.exceptions import InvalidLetterRequest
from docfill.letters.fields import ClientFields

# spellings under which each operator's template may have been saved
KNOWN_OPERATOR_SPELLINGS: dict[str, tuple[str, ...]] = {
    "carlyle": ("Carlyle",),
    "lucia": ("Lúcia", "Lucia"),
    "pedro": ("Pedro",),
    "rafael": ("Rafael",),
    "renan": ("Renan",),
    "vanderleia": ("Vanderleia",),
}


def deaccent(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def operator_key(name: str) -> str:
    return deaccent(name.strip().lower())


class CollectionLetter(BaseLetter):
    """Collection letter: annotated cover, then the attachment, then the rest."""

    def __init__(self, fields: ClientFields, operator: str, attachment: bytes) -> None:
        super().__init__(fields)
        self.operator = operator.strip()
        self._attachment = attachment

    @property
    def attachment(self) -> bytes | None:
        return self._attachment

    def validate(self) -> None:
        if not self.fields.company_name.strip():
            raise InvalidLetterRequest("Informe a Razão Social.")
        if len(self.fields.tax_id_digits) != 14:
            raise InvalidLetterRequest("Informe um CNPJ com 14 dígitos.")
        if not self._attachment:
            raise InvalidLetterRequest("Selecione o PDF para anexar.")
        if not self.operator:
            raise InvalidLetterRequest("Informe o operador.")

    def template_file_names(self, prefix: str) -> list[str]:
        spellings = KNOWN_OPERATOR_SPELLINGS.get(operator_key(self.operator), (self.operator,))
        names: list[str] = []
        for spelling in spellings:
            for variant in (spelling, deaccent(spelling)):
                file_name = f"{prefix}{variant}.pdf"
                if file_name not in names:
                    names.append(file_name)
        return names

    def template_candidates(self, settings: Settings) -> list[str]:
        candidates: list[str] = []
        for file_name in self.template_file_names(settings.collection_template_prefix):
            for directory in settings.collection_template_dirs:
                candidate = f"{directory}/{file_name}"
                if candidate not in candidates:
                    candidates.append(candidate)
        return candidates

    def file_name(self) -> str:
        return f"Carta de Cobranca - {self.fields.tax_id_digits}.pdf"

    def page_sources(
        self,
        base: pymupdf.Document,
        attachment: pymupdf.Document | None,
    ) -> list[PageSource]:
        sources = [PageSource(document=base, page_indexes=(0,))]
        if attachment is not None:
            sources.append(PageSource.all_pages(attachment))
        if base.page_count > 1:
            sources.append(PageSource.from_page(base, 1))
        return sources
