from dataclasses import dataclass, field
from enum import Enum


class DocumentFormat(str, Enum):
    """Closed set of extraction strategies an upload can route to."""

    PDF = "pdf"
    WORD = "word"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    DELIMITED_TEXT = "delimited_text"
    PLAIN_TEXT = "plain_text"


@dataclass(frozen=True)
class UploadedDocument:
    """One upload, alive for a single extraction + completion call."""

    content: bytes
    mime_type: str
    filename: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized text of a document. ``page_count`` is only meaningful for PDFs."""

    text: str
    page_count: int = 0


@dataclass(frozen=True)
class RasterPage:
    """A rendered PDF page, PNG encoded."""

    number: int
    png: bytes


@dataclass(frozen=True)
class DigitalText:
    """Document content usable as text grounding."""

    text: str


@dataclass(frozen=True)
class Scanned:
    """PDF without a usable text layer, carried as rendered pages."""

    pages: list[RasterPage]
    page_count: int


DocumentContent = DigitalText | Scanned


@dataclass(frozen=True)
class TextGrounding:
    """Framed document text placed in the system turn."""

    body: str
    truncated: bool = False


@dataclass(frozen=True)
class ImageGrounding:
    """Caption plus ordered page images placed in the user turn."""

    caption: str
    pages: list[RasterPage] = field(default_factory=list)


GroundingPayload = TextGrounding | ImageGrounding


@dataclass(frozen=True)
class ImageInput:
    """An image to analyze, given either inline bytes or an external URL."""

    mime_type: str = "image/jpeg"
    content: bytes | None = None
    url: str | None = None
