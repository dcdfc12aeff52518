from abc import ABC, abstractmethod

import pymupdf

from docfill.config.settings import Settings
from docfill.engine.models import PageSource
from docfill.letters.fields import ClientFields
from docfill.letters.profiles import TemplateProfile, build_profile


class BaseLetter(ABC):
    """A letter type: which template to fetch, what to draw, how to compose."""

    draws_table: bool = False

    def __init__(self, fields: ClientFields) -> None:
        self.fields = fields

    @property
    def attachment(self) -> bytes | None:
        return None

    def profile(self, settings: Settings) -> TemplateProfile:
        return build_profile(settings, draw_table=self.draws_table)

    @abstractmethod
    def validate(self) -> None:
        """Raise InvalidLetterRequest when the fields cannot produce this letter."""

    @abstractmethod
    def template_candidates(self, settings: Settings) -> list[str]:
        """Template names to try, in order. Never includes a default substitute."""

    @abstractmethod
    def file_name(self) -> str:
        """File name handed to the output sink."""

    @abstractmethod
    def page_sources(
        self,
        base: pymupdf.Document,
        attachment: pymupdf.Document | None,
    ) -> list[PageSource]:
        """Page-selection policy for the composed output."""
