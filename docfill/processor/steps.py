import pymupdf

from docfill.config.settings import Settings
from docfill.engine.anchors import AnchorResolver, fallback_position
from docfill.engine.composer import DocumentComposer
from docfill.engine.exceptions import AnchorNotFound
from docfill.engine.layout import TextLayoutIndex
from docfill.engine.models import AnchorQuery
from docfill.engine.overlay import OverlayRenderer
from docfill.engine.table import TableRenderer
from docfill.letters.fields import format_date_line, resolve_date
from docfill.letters.profiles import DATE_BOX_OFFSET, fixed_date_rect
from docfill.logging.logger import Log
from docfill.output.sink import BaseOutputSink
from docfill.pdf.base import BaseLayoutExtractor
from docfill.processor.pipeline import PipelineContext, PipelineStep
from docfill.templates.base import BaseTemplateSource

MIN_DATE_FONT_SIZE = 8.0


def _require_base(context: PipelineContext, step: str) -> pymupdf.Document:
    if context.base_document is None:
        raise ValueError(f"PipelineContext.base_document must be set before {step}")
    return context.base_document


def _require_index(context: PipelineContext, step: str) -> TextLayoutIndex:
    if context.layout_index is None:
        raise ValueError(f"PipelineContext.layout_index must be set before {step}")
    return context.layout_index


class ValidateRequestStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.letter.validate()
        return context


class FetchTemplateStep(PipelineStep):
    def __init__(self, template_source: BaseTemplateSource, settings: Settings) -> None:
        self._template_source = template_source
        self._settings = settings

    def run(self, context: PipelineContext) -> PipelineContext:
        candidates = context.letter.template_candidates(self._settings)
        context.template_name, context.template_bytes = self._template_source.fetch_first(
            candidates
        )
        return context

    def close(self) -> None:
        self._template_source.close()


class OpenDocumentsStep(PipelineStep):
    def __init__(self, composer: DocumentComposer) -> None:
        self._composer = composer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.base_document = self._composer.open(context.template_bytes)
        attachment = context.letter.attachment
        if attachment:
            context.attachment_document = self._composer.open(attachment)
        Log.info(
            "Opened template",
            template=context.template_name,
            pages=context.base_document.page_count,
        )
        return context


class IndexLayoutStep(PipelineStep):
    def __init__(self, extractor: BaseLayoutExtractor, page_number: int = 1) -> None:
        self._extractor = extractor
        self._page_number = page_number

    def run(self, context: PipelineContext) -> PipelineContext:
        context.layout_index = TextLayoutIndex.build(
            context.template_bytes,
            self._page_number,
            self._extractor,
        )
        Log.info(
            "Indexed template layout",
            template=context.template_name,
            page=self._page_number,
            runs=len(context.layout_index),
        )
        return context


class PlaceClientFieldsStep(PipelineStep):
    """Company name (mandatory) and tax id (only when supplied)."""

    def __init__(self, resolver: AnchorResolver, renderer: OverlayRenderer) -> None:
        self._resolver = resolver
        self._renderer = renderer

    def run(self, context: PipelineContext) -> PipelineContext:
        index = _require_index(context, "placing client fields")
        fields = context.letter.fields
        pairing = context.profile.pairing_for(index, self._resolver)
        if pairing is not context.profile.pairing:
            Log.info(
                "Tax id printed above company placeholder, slots traded",
                page=index.page_number,
            )

        if not self._place(context, pairing.company, fields.company_line):
            raise AnchorNotFound(pairing.company.name, index.page_number)
        tax_id_line = fields.tax_id_line
        if tax_id_line and not self._place(context, pairing.tax_id, tax_id_line):
            raise AnchorNotFound(pairing.tax_id.name, index.page_number)

        Log.info("Placed client fields", company=fields.company_line, tax_id=tax_id_line)
        return context

    def _place(self, context: PipelineContext, query: AnchorQuery, text: str) -> bool:
        index = _require_index(context, "placing client fields")
        page = _require_base(context, "placing client fields")[index.page_number - 1]
        match = self._resolver.find(index, query)
        if match is None:
            return False
        if match.is_fallback:
            # nothing printed to clear; a blank value simply stays blank
            if text.strip():
                x, y_top, font_size = fallback_position(match)
                self._renderer.draw_text_at(page, x, y_top, font_size, text, bold=True)
            return True
        profile = context.profile
        placement = self._renderer.place(
            page,
            match.rect,
            text,
            font_size=profile.field_font_size,
            bold=True,
            offset_x=profile.field_offset_x,
            offset_y=profile.field_offset_y,
        )
        if placement is not None:
            context.placements.append(placement)
        return True


class PlaceDateStep(PipelineStep):
    def __init__(
        self,
        resolver: AnchorResolver,
        renderer: OverlayRenderer,
        settings: Settings,
    ) -> None:
        self._resolver = resolver
        self._renderer = renderer
        self._settings = settings

    def run(self, context: PipelineContext) -> PipelineContext:
        index = _require_index(context, "placing the date")
        page = _require_base(context, "placing the date")[index.page_number - 1]
        when = resolve_date(context.letter.fields.date, self._settings.letter_timezone)
        line = format_date_line(self._settings.letter_city, when)

        match = self._resolver.find(index, context.profile.date_query)
        if match is not None:
            rect, (offset_x, offset_y) = match.rect, (0.0, 0.0)
        else:
            rect = fixed_date_rect(index.geometry.width, index.geometry.height)
            offset_x, offset_y = DATE_BOX_OFFSET
        placement = self._renderer.place(
            page,
            rect,
            line,
            font_size=max(MIN_DATE_FONT_SIZE, rect.font_size - 1),
            offset_x=offset_x,
            offset_y=offset_y,
        )
        if placement is not None:
            context.placements.append(placement)
        Log.info("Placed date line", line=line, anchored=match is not None)
        return context


class DrawTitlesTableStep(PipelineStep):
    """Draws the titles table on page 2 when the template has one, else page 1."""

    def __init__(self, table_renderer: TableRenderer) -> None:
        self._table_renderer = table_renderer

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.profile.draw_table:
            return context
        document = _require_base(context, "drawing the titles table")
        page = document[1] if document.page_count > 1 else document[0]
        rows = [title.cells() for title in context.letter.fields.titles]
        context.table_drawn = self._table_renderer.draw(page, rows)
        if context.table_drawn:
            Log.info("Drew titles table", rows=len(rows), page=page.number + 1)
        return context


class ComposeStep(PipelineStep):
    def __init__(self, composer: DocumentComposer) -> None:
        self._composer = composer

    def run(self, context: PipelineContext) -> PipelineContext:
        base = _require_base(context, "composing")
        sources = context.letter.page_sources(base, context.attachment_document)
        context.output_bytes = self._composer.assemble(sources)
        context.output_page_count = sum(len(s.page_indexes) for s in sources)
        context.file_name = context.letter.file_name()
        return context


class DeliverStep(PipelineStep):
    def __init__(self, sink: BaseOutputSink) -> None:
        self._sink = sink

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.output_bytes:
            raise ValueError("PipelineContext.output_bytes must be set before delivery")
        self._sink.deliver(context.file_name, context.output_bytes)
        return context
