from collections.abc import Sequence
from dataclasses import dataclass

import pymupdf

from docfill.engine.models import ClearBox, Rect
from docfill.engine.overlay import draw_text, fill_box, text_width

HEADER_LABELS = ("NOTA FISCAL", "PARCELA", "VENCIMENTO", "R$ VALOR")

COLUMN_X_FRACTIONS = (0.12, 0.33, 0.52, 0.72)
COLUMN_WIDTH_FRACTIONS = (0.15, 0.12, 0.15, 0.15)
CLEAR_TOP_FRACTION = 0.84
MIN_CLEARED_ROWS = 6


@dataclass(frozen=True)
class TableColumns:
    """Column left edges and widths plus the top of the cleared area."""

    x: tuple[float, ...]
    widths: tuple[float, ...]
    clear_top: float
    right_margin: float = 40.0
    font_size: float = 11.0

    @classmethod
    def from_page(cls, width: float, height: float) -> "TableColumns":
        return cls(
            x=tuple(width * f for f in COLUMN_X_FRACTIONS),
            widths=tuple(width * f for f in COLUMN_WIDTH_FRACTIONS),
            clear_top=height * CLEAR_TOP_FRACTION,
        )

    @classmethod
    def from_header_rects(cls, headers: Sequence[Rect], gap: float = 18.0) -> "TableColumns":
        """Derive columns from the header runs printed in the template.

        Each column spans up to the next header minus ``gap``; the last one
        keeps a fixed width.
        """
        if len(headers) != len(HEADER_LABELS):
            raise ValueError(f"expected {len(HEADER_LABELS)} header rects, got {len(headers)}")
        xs = tuple(h.x for h in headers)
        widths = tuple(xs[i + 1] - xs[i] - gap for i in range(len(xs) - 1)) + (46.0,)
        font_size = max(8.0, min(11.0, headers[0].height or 11.0) + 1)
        return cls(
            x=xs,
            widths=widths,
            clear_top=headers[0].y_bottom + 36,
            right_margin=13.0,
            font_size=font_size,
        )

    @property
    def line_height(self) -> float:
        return self.font_size + 3


class TableRenderer:
    """Draws the titles table (note, installment, due date, amount)."""

    def layout_box(self, columns: TableColumns, row_count: int) -> ClearBox:
        max_rows = max(row_count, MIN_CLEARED_ROWS)
        bottom = columns.clear_top - columns.line_height * (max_rows + 1.2)
        left = columns.x[0] - 6
        right = columns.x[-1] + columns.widths[-1] + columns.right_margin
        return ClearBox(x=left, y=bottom, width=right - left, height=columns.clear_top - bottom)

    def draw(
        self,
        page: pymupdf.Page,
        rows: Sequence[Sequence[str]],
        columns: TableColumns | None = None,
    ) -> bool:
        """Clear the table area and draw headers plus rows.

        Returns False, drawing nothing, when there are no rows.
        """
        if not rows:
            return False
        if columns is None:
            columns = TableColumns.from_page(page.rect.width, page.rect.height)
        fill_box(page, self.layout_box(columns, len(rows)))

        size = columns.font_size
        line_height = columns.line_height
        header_y = columns.clear_top + line_height * 0.15
        for i, label in enumerate(HEADER_LABELS):
            draw_text(page, self._centered_x(columns, i, label), header_y, label, size, bold=True)

        for idx, row in enumerate(rows):
            y = columns.clear_top - line_height * (idx + 1) + (line_height - size) * 0.5
            for i in range(len(HEADER_LABELS)):
                text = str(row[i] if i < len(row) else "").strip()
                if not text:
                    continue
                draw_text(page, self._centered_x(columns, i, text), y, text, size)
        return True

    @staticmethod
    def _centered_x(columns: TableColumns, column: int, text: str) -> float:
        width = text_width(text, columns.font_size)
        return columns.x[column] + max(0.0, (columns.widths[column] - width) / 2)
