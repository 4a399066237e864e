"""Heuristic for PDFs that report pages but carry no usable text layer."""

import re

DEFAULT_MIN_CHARS_PER_PAGE = 100

_WHITESPACE_RUN = re.compile(r"\s+")


def average_chars_per_page(text: str, page_count: int) -> float:
    """Characters per page after collapsing whitespace runs to single spaces."""
    if page_count <= 0:
        return 0.0
    collapsed = _WHITESPACE_RUN.sub(" ", text).strip()
    return len(collapsed) / page_count


def is_scanned(
    text: str,
    page_count: int,
    min_chars_per_page: int = DEFAULT_MIN_CHARS_PER_PAGE,
) -> bool:
    """Classify a PDF as scanned.

    A document without pages is treated as scanned. Otherwise it is scanned when
    the average is strictly below ``min_chars_per_page``; an average exactly at
    the threshold counts as digital text. Sparse slide-style PDFs can land on
    the scanned side of this line.
    """
    if page_count <= 0:
        return True
    return average_chars_per_page(text, page_count) < min_chars_per_page
