import pymupdf
import pytest

from docfill.engine.models import Rect
from docfill.engine.table import HEADER_LABELS, TableColumns, TableRenderer


def _page() -> tuple[pymupdf.Document, pymupdf.Page]:
    doc = pymupdf.open()
    return doc, doc.new_page(width=612, height=792)


def _header(x: float) -> Rect:
    return Rect(x=x, y_top=512, y_bottom=500, width=40, height=12, font_size=12)


class TestTableColumns:
    def test_from_page_uses_page_fractions(self) -> None:
        columns = TableColumns.from_page(612, 792)
        assert columns.x[0] == pytest.approx(612 * 0.12)
        assert columns.clear_top == pytest.approx(792 * 0.84)
        assert columns.line_height == pytest.approx(14)

    def test_from_header_rects_spans_to_next_header(self) -> None:
        columns = TableColumns.from_header_rects([_header(x) for x in (70, 200, 300, 420)])
        assert columns.x == (70, 200, 300, 420)
        assert columns.widths == (112, 82, 102, 46)
        assert columns.clear_top == pytest.approx(536)

    def test_from_header_rects_requires_every_header(self) -> None:
        with pytest.raises(ValueError, match="expected 4 header rects"):
            TableColumns.from_header_rects([_header(70)])


class TestTableRenderer:
    def test_empty_rows_draw_nothing(self) -> None:
        _, page = _page()
        assert TableRenderer().draw(page, []) is False
        assert page.get_drawings() == []

    def test_draws_headers_and_rows(self) -> None:
        doc, page = _page()
        rows = [("1234", "1/3", "10/01/2025", "1.500,00"), ("1235", "2/3", "10/02/2025", "1.500,00")]
        assert TableRenderer().draw(page, rows) is True
        assert len(page.get_drawings()) == 1

        with pymupdf.open(stream=doc.tobytes(), filetype="pdf") as reopened:
            text = reopened[0].get_text()
        for label in HEADER_LABELS:
            assert label in text
        assert "10/02/2025" in text
        assert "1235" in text

    def test_short_rows_skip_missing_cells(self) -> None:
        doc, page = _page()
        assert TableRenderer().draw(page, [("999",)]) is True
        with pymupdf.open(stream=doc.tobytes(), filetype="pdf") as reopened:
            assert "999" in reopened[0].get_text()

    def test_layout_box_clears_at_least_six_rows(self) -> None:
        columns = TableColumns.from_page(612, 792)
        box = TableRenderer().layout_box(columns, row_count=2)
        assert box.height == pytest.approx(columns.line_height * 7.2)
        assert box.y + box.height == pytest.approx(columns.clear_top)

    def test_layout_box_grows_with_rows(self) -> None:
        columns = TableColumns.from_page(612, 792)
        box = TableRenderer().layout_box(columns, row_count=10)
        assert box.height == pytest.approx(columns.line_height * 11.2)
