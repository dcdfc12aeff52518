"""Redact-then-redraw overlays for fixed-layout templates.

PDF has no "replace this text" operation, so a field is updated by painting
an opaque box over the printed placeholder and drawing the new value inside
it. Geometry is computed in native coordinates and converted to PyMuPDF page
space through each page's own transformation matrix.
"""

import pymupdf

from docfill.engine.models import LINE_HEIGHT_MULTIPLIER, ClearBox, FieldPlacement, Rect

PAD_X = 10.0
PAD_Y = 6.0

REGULAR_FONT = "helv"
BOLD_FONT = "hebo"

WHITE = (1.0, 1.0, 1.0)
BLACK = (0.0, 0.0, 0.0)


def font_name(bold: bool) -> str:
    return BOLD_FONT if bold else REGULAR_FONT


def text_width(text: str, font_size: float, bold: bool = False) -> float:
    """Width of ``text`` from base-14 Helvetica metrics, without rendering."""
    return pymupdf.get_text_length(text, fontname=font_name(bold), fontsize=font_size)


def to_page_point(page: pymupdf.Page, x: float, y: float) -> pymupdf.Point:
    return pymupdf.Point(x, y) * page.transformation_matrix


def to_page_rect(page: pymupdf.Page, box: ClearBox) -> pymupdf.Rect:
    bottom_left = to_page_point(page, box.x, box.y)
    top_right = to_page_point(page, box.x + box.width, box.y + box.height)
    return pymupdf.Rect(bottom_left, top_right).normalize()


def fill_box(page: pymupdf.Page, box: ClearBox) -> None:
    page.draw_rect(to_page_rect(page, box), color=None, fill=WHITE, overlay=True)


def draw_text(
    page: pymupdf.Page,
    x: float,
    baseline_y: float,
    text: str,
    font_size: float,
    bold: bool = False,
) -> None:
    page.insert_text(
        to_page_point(page, x, baseline_y),
        text,
        fontsize=font_size,
        fontname=font_name(bold),
        color=BLACK,
    )


class OverlayRenderer:
    """Covers a template slot and draws a replacement value inside it."""

    def __init__(self, pad_x: float = PAD_X, pad_y: float = PAD_Y) -> None:
        self._pad_x = pad_x
        self._pad_y = pad_y

    def plan(
        self,
        rect: Rect,
        text: str,
        font_size: float | None = None,
        bold: bool = False,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
    ) -> FieldPlacement:
        """Compute the clear box and text origin; draws nothing.

        The box is wide enough for both the old run and the new text and
        grows downward from the old run's top edge.
        """
        size = font_size or rect.font_size
        width = text_width(text, size, bold)
        clear_w = max(rect.width, width) + self._pad_x * 2
        clear_h = max(rect.height, size) * LINE_HEIGHT_MULTIPLIER + self._pad_y
        rect_bottom = rect.y_top - clear_h
        text_y = rect_bottom + (clear_h - size) * 0.5
        return FieldPlacement(
            rect=rect,
            text=text,
            bold=bold,
            offset_x=offset_x,
            offset_y=offset_y,
            font_size=size,
            clear_box=ClearBox(
                x=rect.x - self._pad_x + offset_x,
                y=rect_bottom + offset_y,
                width=clear_w,
                height=clear_h,
            ),
            text_origin=(rect.x + offset_x, text_y + offset_y),
        )

    def place(
        self,
        page: pymupdf.Page,
        rect: Rect | None,
        text: str,
        font_size: float | None = None,
        bold: bool = False,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
    ) -> FieldPlacement | None:
        """Redact the slot at ``rect`` and draw ``text`` in it.

        Blank text still clears the slot. Returns None only when there is no
        anchor rectangle to place against.
        """
        if rect is None:
            return None
        placement = self.plan(rect, text, font_size, bold, offset_x, offset_y)
        fill_box(page, placement.clear_box)
        if text.strip():
            x, y = placement.text_origin
            draw_text(page, x, y, text, placement.font_size, bold)
        return placement

    def draw_text_at(
        self,
        page: pymupdf.Page,
        x: float,
        y_top: float,
        font_size: float,
        text: str,
        bold: bool = False,
    ) -> bool:
        """Draw text whose top edge sits at ``y_top``; no clear box."""
        if not text.strip():
            return False
        draw_text(page, x, y_top - font_size, text, font_size, bold)
        return True
