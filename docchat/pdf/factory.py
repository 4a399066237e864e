from docchat.config.settings import Settings
from docchat.pdf.base import BasePdfExtractor
from docchat.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docchat.pdf.pymupdf_adapter import PyMuPdfAdapter
from docchat.pdf.rasterizer import PdfRasterizer


class PdfExtractorFactory:
    """Creates the PDF text extractor and rasterizer from settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_rasterizer(cls, settings: Settings) -> PdfRasterizer:
        return PdfRasterizer(
            max_pages=settings.raster_max_pages,
            scale=settings.raster_scale,
        )
