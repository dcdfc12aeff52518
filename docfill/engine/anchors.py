from docfill.engine.exceptions import AnchorNotFound
from docfill.engine.layout import TextLayoutIndex
from docfill.engine.models import AnchorMatch, AnchorQuery
from docfill.logging.logger import Log


class AnchorResolver:
    """Finds the run a field is anchored to by the text printed there.

    Queries are evaluated in order (primary, then each fallback) against the
    trimmed, case-folded text of every run; the first run that satisfies a
    query wins. Which query belongs to which field is the caller's decision.
    """

    def find(self, index: TextLayoutIndex, query: AnchorQuery) -> AnchorMatch | None:
        for position, candidate in enumerate(query.chain()):
            for run in index.runs:
                if candidate.predicate(run.text.strip().casefold()):
                    if position:
                        Log.warning(
                            "Primary anchor missing, using fallback",
                            anchor=query.name,
                            fallback=candidate.name,
                            page=index.page_number,
                        )
                    return AnchorMatch(
                        run=run,
                        rect=index.rect_of(run),
                        query=candidate,
                        is_fallback=position > 0,
                    )
        return None

    def require(self, index: TextLayoutIndex, query: AnchorQuery) -> AnchorMatch:
        """Like ``find`` but a missing anchor is fatal."""
        match = self.find(index, query)
        if match is None:
            raise AnchorNotFound(query.name, index.page_number)
        return match


FALLBACK_MIN_FONT_SIZE = 11.0
FALLBACK_MAX_FONT_SIZE = 13.0
FALLBACK_LINE_GAP = 1.2


def fallback_position(match: AnchorMatch) -> tuple[float, float, float]:
    """(x, y_top, font_size) for a field drawn relative to a fallback anchor.

    The field sits ``lines_above`` line gaps above the anchor's top edge; the
    gap is a fixed multiple of the anchor's clamped height.
    """
    font_size = max(
        FALLBACK_MIN_FONT_SIZE,
        min(FALLBACK_MAX_FONT_SIZE, match.rect.height or 12.0),
    )
    line_gap = font_size * FALLBACK_LINE_GAP
    return match.rect.x, match.rect.y_top + line_gap * match.query.lines_above, font_size
