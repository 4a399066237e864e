from docchat.documents.classifier import classify
from docchat.documents.exceptions import OversizedUploadError
from docchat.documents.models import DigitalText, DocumentFormat, Scanned
from docchat.extraction.registry import ExtractorRegistry
from docchat.grounding.context_builder import ContextBuilder
from docchat.logging.logger import Log
from docchat.pdf.rasterizer import PdfRasterizer
from docchat.pdf.scan_detector import average_chars_per_page, is_scanned
from docchat.processor.pipeline import PipelineContext, PipelineStep


class CheckSizeStep(PipelineStep):
    def __init__(self, max_bytes: int) -> None:
        self._max_bytes = max_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        size = context.document.size
        if size > self._max_bytes:
            raise OversizedUploadError(size, self._max_bytes)
        return context


class ClassifyStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        context.document_format = classify(document.mime_type, document.filename)
        Log.info(f"Classified {document.filename} as {context.document_format.value}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, registry: ExtractorRegistry) -> None:
        self._registry = registry

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document_format is None:
            raise ValueError("PipelineContext.document_format must be set before extraction")
        context.extraction = self._registry.extract(context.document, context.document_format)
        Log.info(
            f"Extracted {len(context.extraction.text)} chars from {context.document.filename}"
        )
        return context


class InspectContentStep(PipelineStep):
    """Chooses between text grounding and the rendered-page fallback."""

    def __init__(self, rasterizer: PdfRasterizer, min_chars_per_page: int) -> None:
        self._rasterizer = rasterizer
        self._min_chars_per_page = min_chars_per_page

    def run(self, context: PipelineContext) -> PipelineContext:
        extraction = context.extraction
        if extraction is None:
            raise ValueError("PipelineContext.extraction must be set before inspection")
        if context.document_format is not DocumentFormat.PDF:
            context.content = DigitalText(extraction.text)
            return context

        filename = context.document.filename
        average = average_chars_per_page(extraction.text, extraction.page_count)
        if not is_scanned(extraction.text, extraction.page_count, self._min_chars_per_page):
            Log.info(
                f"Text layer found in {filename}",
                pages=extraction.page_count,
                chars_per_page=round(average),
            )
            context.content = DigitalText(extraction.text)
            return context

        Log.info(
            f"Scanned PDF detected, using page images for {filename}",
            pages=extraction.page_count,
            chars_per_page=round(average),
        )
        pages = self._rasterizer.rasterize(context.document.content)
        context.content = Scanned(pages=pages, page_count=extraction.page_count)
        return context


class BuildGroundingStep(PipelineStep):
    def __init__(self, context_builder: ContextBuilder) -> None:
        self._context_builder = context_builder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.content is None:
            raise ValueError("PipelineContext.content must be set before building grounding")
        context.grounding = self._context_builder.build(
            context.content, context.document.filename
        )
        return context
