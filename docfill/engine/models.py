import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace

import pymupdf

from docfill.pdf.models import TextRun

LINE_HEIGHT_MULTIPLIER = 1.4


@dataclass(frozen=True)
class Rect:
    """Text bounds in native document coordinates (origin bottom-left)."""

    x: float
    y_top: float
    y_bottom: float
    width: float
    height: float
    font_size: float

    @property
    def center_y(self) -> float:
        return (self.y_top + self.y_bottom) / 2

    def shifted(self, dx: float = 0.0, dy: float = 0.0) -> "Rect":
        return replace(self, x=self.x + dx, y_top=self.y_top + dy, y_bottom=self.y_bottom + dy)


@dataclass(frozen=True)
class ClearBox:
    """Opaque redaction box in native coordinates; ``y`` is the bottom edge."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class AnchorQuery:
    """Predicate over trimmed, case-folded run text plus ordered fallbacks.

    ``lines_above`` is only read when the query is used as a fallback: the
    field is then drawn that many line gaps above the matched run.
    """

    name: str
    predicate: Callable[[str], bool] = field(compare=False)
    fallbacks: tuple["AnchorQuery", ...] = ()
    lines_above: float = 0.0

    @classmethod
    def starts_with(cls, prefix: str, name: str | None = None, **kwargs: object) -> "AnchorQuery":
        needle = prefix.strip().casefold()
        return cls(name=name or f"starts_with:{prefix}", predicate=lambda s: s.startswith(needle), **kwargs)  # type: ignore[arg-type]

    @classmethod
    def contains(cls, fragment: str, name: str | None = None, **kwargs: object) -> "AnchorQuery":
        needle = fragment.strip().casefold()
        return cls(name=name or f"contains:{fragment}", predicate=lambda s: needle in s, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def matches(cls, pattern: str, name: str | None = None, **kwargs: object) -> "AnchorQuery":
        compiled = re.compile(pattern, re.IGNORECASE)
        return cls(name=name or f"matches:{pattern}", predicate=lambda s: compiled.search(s) is not None, **kwargs)  # type: ignore[arg-type]

    def with_fallbacks(self, *fallbacks: "AnchorQuery") -> "AnchorQuery":
        return replace(self, fallbacks=self.fallbacks + fallbacks)

    def primary(self) -> "AnchorQuery":
        """This query alone, without its fallbacks."""
        return replace(self, fallbacks=())

    def chain(self) -> tuple["AnchorQuery", ...]:
        """Primary query followed by its fallbacks, in evaluation order."""
        return (self, *self.fallbacks)


@dataclass(frozen=True)
class AnchorPairing:
    """Company-name and tax-id anchors for one template variant."""

    company: AnchorQuery
    tax_id: AnchorQuery

    def swapped(self) -> "AnchorPairing":
        """Pairing for templates where the two printed lines trade roles.

        Fallbacks stay with their field so the greeting-relative positions
        keep the company line above the tax id line.
        """
        company = replace(
            self.tax_id,
            name=f"company@{self.tax_id.name}",
            fallbacks=self.company.fallbacks,
        )
        tax_id = replace(
            self.company,
            name=f"tax_id@{self.company.name}",
            fallbacks=self.tax_id.fallbacks,
        )
        return AnchorPairing(company=company, tax_id=tax_id)


@dataclass(frozen=True)
class AnchorMatch:
    run: TextRun
    rect: Rect
    query: AnchorQuery
    is_fallback: bool = False


@dataclass(frozen=True)
class FieldPlacement:
    """Instruction to draw one field plus the geometry computed for it."""

    rect: Rect
    text: str
    bold: bool
    offset_x: float
    offset_y: float
    font_size: float
    clear_box: ClearBox
    text_origin: tuple[float, float]


@dataclass(frozen=True)
class PageSource:
    """Pages of one loaded document that contribute to the output, in order."""

    document: pymupdf.Document
    page_indexes: tuple[int, ...]

    @classmethod
    def all_pages(cls, document: pymupdf.Document) -> "PageSource":
        return cls(document=document, page_indexes=tuple(range(document.page_count)))

    @classmethod
    def from_page(cls, document: pymupdf.Document, start: int) -> "PageSource":
        return cls(document=document, page_indexes=tuple(range(start, document.page_count)))
