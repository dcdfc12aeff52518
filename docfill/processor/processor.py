from pathlib import Path

from docfill.config.settings import Settings
from docfill.engine.anchors import AnchorResolver
from docfill.engine.composer import DocumentComposer
from docfill.engine.overlay import OverlayRenderer
from docfill.engine.table import TableRenderer
from docfill.exceptions import DocumentEngineError
from docfill.letters.base import BaseLetter
from docfill.logging.logger import Log
from docfill.output.sink import BaseOutputSink, FilesystemSink
from docfill.pdf.factory import LayoutExtractorFactory
from docfill.processor.models import GeneratedDocument
from docfill.processor.pipeline import PipelineContext, PipelineStep
from docfill.processor.steps import (
    ComposeStep,
    DeliverStep,
    DrawTitlesTableStep,
    FetchTemplateStep,
    IndexLayoutStep,
    OpenDocumentsStep,
    PlaceClientFieldsStep,
    PlaceDateStep,
    ValidateRequestStep,
)
from docfill.templates.factory import TemplateSourceFactory


class Processor:
    """Runs a letter through the document pipeline.

    Pipeline: validate -> fetch template -> open -> index layout -> place
    fields -> place date -> draw table -> compose -> deliver.
    Steps run strictly in sequence; the first failure aborts the run, so
    nothing reaches the sink unless every earlier step succeeded.
    """

    def __init__(self, steps: list[PipelineStep], settings: Settings) -> None:
        self._steps = steps
        self._settings = settings

    def process(self, letter: BaseLetter) -> GeneratedDocument:
        Log.info("Generating letter", letter=type(letter).__name__)
        context = PipelineContext(letter=letter, profile=letter.profile(self._settings))
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            if isinstance(exc, DocumentEngineError):
                Log.error(exc.user_message, letter=type(letter).__name__, detail=str(exc))
            else:
                Log.error(f"{type(letter).__name__} failed: {exc}")
            raise
        finally:
            context.close_documents()

        Log.info(
            "Generated document",
            file_name=context.file_name,
            pages=context.output_page_count,
            size=len(context.output_bytes),
        )
        return GeneratedDocument(
            file_name=context.file_name,
            content=context.output_bytes,
            template_name=context.template_name,
            page_count=context.output_page_count,
        )

    def close(self) -> None:
        """Release adapter resources such as the template HTTP client."""
        for step in self._steps:
            step.close()

    def __enter__(self) -> "Processor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_steps(
    settings: Settings,
    sink: BaseOutputSink | None = None,
) -> list[PipelineStep]:
    composer = DocumentComposer()
    resolver = AnchorResolver()
    renderer = OverlayRenderer()
    steps: list[PipelineStep] = [
        ValidateRequestStep(),
        FetchTemplateStep(TemplateSourceFactory.create(settings), settings),
        OpenDocumentsStep(composer),
        IndexLayoutStep(LayoutExtractorFactory.create(settings)),
        PlaceClientFieldsStep(resolver, renderer),
        PlaceDateStep(resolver, renderer, settings),
        DrawTitlesTableStep(TableRenderer()),
        ComposeStep(composer),
    ]
    if sink is not None:
        steps.append(DeliverStep(sink))
    return steps


def build_processor(
    settings: Settings,
    sink: BaseOutputSink | None = None,
    deliver: bool = True,
) -> Processor:
    """Build a Processor with all required adapters.

    With ``deliver`` and no explicit sink, documents are saved under
    ``settings.output_dir``.
    """
    Log.configure(settings.log_level)
    if deliver and sink is None:
        sink = FilesystemSink(Path(settings.output_dir))
    return Processor(steps=build_steps(settings, sink if deliver else None), settings=settings)
