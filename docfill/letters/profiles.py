"""Where each field lives on the known template family.

The templates are static, non-form PDFs: a field is located by the text
already printed in its slot. That knowledge is kept here as query data.
"""

import re
from dataclasses import dataclass

from docfill.config.settings import Settings
from docfill.engine.anchors import AnchorResolver
from docfill.engine.layout import TextLayoutIndex
from docfill.engine.models import AnchorPairing, AnchorQuery, Rect

TAX_ID_PREFIX = "CNPJ:"
GREETING_PATTERN = r"prezados"

# fixed date slot used when the template has no printed date line
DATE_BOX_X_FRACTION = 0.58
DATE_BOX_TOP_FRACTION = 0.78
DATE_BOX_WIDTH = 220.0
DATE_BOX_HEIGHT = 12.0
DATE_BOX_FONT_SIZE = 11.0
DATE_BOX_OFFSET = (23.0, -12.0)


@dataclass(frozen=True)
class TemplateProfile:
    pairing: AnchorPairing
    date_query: AnchorQuery
    field_font_size: float = 12.0
    field_offset_x: float = 0.0
    field_offset_y: float = 0.0
    keep_company_above_tax_id: bool = True
    draw_table: bool = False

    def pairing_for(self, index: TextLayoutIndex, resolver: AnchorResolver) -> AnchorPairing:
        """Pairing for the printed layout of this template.

        Some variants print the tax-id line above the company placeholder.
        When both lines are present in that order the slots trade roles, so
        the company still appears first. Every other layout keeps the
        placeholder for the company.
        """
        if not self.keep_company_above_tax_id:
            return self.pairing
        company = resolver.find(index, self.pairing.company.primary())
        tax_id = resolver.find(index, self.pairing.tax_id.primary())
        if company is None or tax_id is None:
            return self.pairing
        if tax_id.rect.center_y <= company.rect.center_y:
            return self.pairing
        return self.pairing.swapped()


def greeting_query(lines_above: float) -> AnchorQuery:
    return AnchorQuery.matches(GREETING_PATTERN, name="greeting", lines_above=lines_above)


def date_line_query(city: str) -> AnchorQuery:
    return AnchorQuery.matches(
        rf"^{re.escape(city.strip().casefold())},\s*\d{{2}}\s+de\s+",
        name="date_line",
    )


def client_pairing(placeholder: str) -> AnchorPairing:
    """Company and tax-id anchors, both falling back to the greeting line."""
    return AnchorPairing(
        company=AnchorQuery.contains(placeholder, name="company_placeholder").with_fallbacks(
            greeting_query(lines_above=2)
        ),
        tax_id=AnchorQuery.starts_with(TAX_ID_PREFIX, name="tax_id_line").with_fallbacks(
            greeting_query(lines_above=1)
        ),
    )


def build_profile(settings: Settings, draw_table: bool) -> TemplateProfile:
    return TemplateProfile(
        pairing=client_pairing(settings.company_placeholder),
        date_query=date_line_query(settings.letter_city),
        draw_table=draw_table,
        keep_company_above_tax_id=settings.keep_company_above_tax_id,
    )


def fixed_date_rect(page_width: float, page_height: float) -> Rect:
    return Rect(
        x=page_width * DATE_BOX_X_FRACTION,
        y_top=page_height * DATE_BOX_TOP_FRACTION,
        y_bottom=page_height * DATE_BOX_TOP_FRACTION - DATE_BOX_HEIGHT,
        width=DATE_BOX_WIDTH,
        height=DATE_BOX_HEIGHT,
        font_size=DATE_BOX_FONT_SIZE,
    )
