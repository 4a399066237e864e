from docchat.config.settings import Settings
from docchat.documents.models import GroundingPayload, UploadedDocument
from docchat.extraction.registry import ExtractorRegistry
from docchat.grounding.context_builder import ContextBuilder
from docchat.logging.logger import Log
from docchat.pdf.factory import PdfExtractorFactory
from docchat.processor.pipeline import PipelineContext, PipelineStep
from docchat.processor.steps import (
    BuildGroundingStep,
    CheckSizeStep,
    ClassifyStep,
    ExtractTextStep,
    InspectContentStep,
)


class DocumentIngestor:
    """Turns one upload into a grounding payload.

    Pipeline: check size -> classify -> extract -> inspect (scan detection,
    rasterization) -> build grounding. Steps run strictly in order; any
    DocumentError propagates to the caller untouched.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def ingest(self, document: UploadedDocument) -> GroundingPayload:
        Log.info(
            f"Ingesting {document.filename}",
            mime_type=document.mime_type,
            size=document.size,
        )
        context = PipelineContext(document=document)
        for step in self._steps:
            context = step.run(context)
        if context.grounding is None:
            raise ValueError("Pipeline finished without a grounding payload")
        return context.grounding


def build_ingestor(settings: Settings) -> DocumentIngestor:
    """Build a DocumentIngestor with all required adapters."""
    return DocumentIngestor(
        steps=[
            CheckSizeStep(settings.max_upload_bytes),
            ClassifyStep(),
            ExtractTextStep(ExtractorRegistry.create(settings)),
            InspectContentStep(
                PdfExtractorFactory.create_rasterizer(settings),
                settings.scan_min_chars_per_page,
            ),
            BuildGroundingStep(ContextBuilder(max_chars=settings.max_context_chars)),
        ]
    )
