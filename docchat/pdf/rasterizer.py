import pymupdf

from docchat.documents.models import RasterPage
from docchat.logging.logger import Log
from docchat.pdf.exceptions import RasterizationError

DEFAULT_MAX_PAGES = 15
DEFAULT_SCALE = 1.5


class PdfRasterizer:
    """Renders the leading pages of a PDF to PNG for vision grounding."""

    def __init__(
        self,
        max_pages: int = DEFAULT_MAX_PAGES,
        scale: float = DEFAULT_SCALE,
    ) -> None:
        self._max_pages = max_pages
        self._scale = scale

    def rasterize(self, pdf_bytes: bytes) -> list[RasterPage]:
        """Render pages 1..min(N, max_pages) in order.

        The call is atomic: if any page fails to render, no pages are returned.

        Raises:
            RasterizationError: if the document cannot be opened or a page fails.
        """
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise RasterizationError(f"Cannot open PDF for rendering: {exc}") from exc

        with doc:
            total_pages = doc.page_count
            page_limit = min(total_pages, self._max_pages)
            matrix = pymupdf.Matrix(self._scale, self._scale)
            pages: list[RasterPage] = []
            for index in range(page_limit):
                try:
                    pixmap = doc[index].get_pixmap(matrix=matrix, alpha=False)
                    pages.append(RasterPage(number=index + 1, png=pixmap.tobytes("png")))
                except Exception as exc:
                    raise RasterizationError(
                        f"Failed to render page {index + 1}: {exc}"
                    ) from exc

        Log.info(f"Rendered {len(pages)} of {total_pages} PDF pages")
        return pages
