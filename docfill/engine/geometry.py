from docfill.engine.models import Rect
from docfill.pdf.models import PageGeometry, TextRun

MIN_FALLBACK_FONT_SIZE = 10.0
MAX_FALLBACK_FONT_SIZE = 13.0
DEFAULT_FONT_SIZE = 11.0


class RectConverter:
    """Maps device-space runs into native document rectangles."""

    @staticmethod
    def to_native_rect(run: TextRun, geometry: PageGeometry) -> Rect:
        """Convert a run's bounds through the page transform.

        The origin and the opposite corner are converted independently so a
        vertical flip (or any other affine part of the transform) is honoured;
        width and height are never copied from device space.
        """
        x1, y1 = geometry.to_native(run.device_x, run.device_y)
        x2, y2 = geometry.to_native(
            run.device_x + run.device_width,
            run.device_y - run.device_height,
        )
        height = abs(y1 - y2)
        if height:
            font_size = height
        else:
            # zero-height synthetic runs
            font_size = max(
                MIN_FALLBACK_FONT_SIZE,
                min(MAX_FALLBACK_FONT_SIZE, run.device_height or DEFAULT_FONT_SIZE),
            )
        return Rect(
            x=min(x1, x2),
            y_top=max(y1, y2),
            y_bottom=min(y1, y2),
            width=abs(x2 - x1),
            height=height,
            font_size=font_size,
        )
