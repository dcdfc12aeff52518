from dataclasses import dataclass, field

Transform = tuple[float, float, float, float, float, float]


@dataclass(frozen=True)
class TextRun:
    """One contiguous run of glyphs reported by a layout extraction pass.

    Device space has its origin at the top-left corner with y growing down;
    ``device_y`` is the bottom edge of the run.
    """

    text: str
    device_x: float
    device_y: float
    device_width: float
    device_height: float


@dataclass(frozen=True)
class PageGeometry:
    """Device-to-native transform of one rendered page."""

    transform: Transform
    width: float
    height: float

    @classmethod
    def flipped(cls, width: float, height: float) -> "PageGeometry":
        """Geometry of an unrotated page whose device space is y-down."""
        return cls(transform=(1.0, 0.0, 0.0, -1.0, 0.0, height), width=width, height=height)

    def to_native(self, x: float, y: float) -> tuple[float, float]:
        a, b, c, d, e, f = self.transform
        return (a * x + c * y + e, b * x + d * y + f)


@dataclass
class PageLayout:
    """Output of one extraction pass over a single page."""

    geometry: PageGeometry
    runs: list[TextRun] = field(default_factory=list)
