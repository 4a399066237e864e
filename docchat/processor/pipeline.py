from abc import ABC, abstractmethod
from dataclasses import dataclass

from docchat.documents.models import (
    DocumentContent,
    DocumentFormat,
    ExtractionResult,
    GroundingPayload,
    UploadedDocument,
)


@dataclass(slots=True)
class PipelineContext:
    document: UploadedDocument
    document_format: DocumentFormat | None = None
    extraction: ExtractionResult | None = None
    content: DocumentContent | None = None
    grounding: GroundingPayload | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
