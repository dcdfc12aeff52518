from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import pymupdf

from docfill.engine.layout import TextLayoutIndex
from docfill.engine.models import FieldPlacement
from docfill.letters.base import BaseLetter
from docfill.letters.profiles import TemplateProfile


@dataclass(slots=True)
class PipelineContext:
    letter: BaseLetter
    profile: TemplateProfile
    template_name: str = ""
    template_bytes: bytes = b""
    base_document: pymupdf.Document | None = None
    attachment_document: pymupdf.Document | None = None
    layout_index: TextLayoutIndex | None = None
    placements: list[FieldPlacement] = field(default_factory=list)
    table_drawn: bool = False
    output_bytes: bytes = b""
    output_page_count: int = 0
    file_name: str = ""
    error_message: str = ""

    def close_documents(self) -> None:
        for document in (self.base_document, self.attachment_document):
            if document is not None:
                document.close()
        self.base_document = None
        self.attachment_document = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the step. Most steps hold none."""
