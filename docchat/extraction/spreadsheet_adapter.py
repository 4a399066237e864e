"""Spreadsheet extraction: every sheet rendered as comma-delimited rows."""

import csv
import io
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time

import openpyxl
import xlrd

from docchat.documents.exceptions import ExtractionFailedError
from docchat.documents.models import ExtractionResult, UploadedDocument
from docchat.extraction.base import BaseTextExtractor

LEGACY_EXCEL_MIME_TYPE = "application/vnd.ms-excel"

Row = Iterable[object]


class SpreadsheetAdapter(BaseTextExtractor):
    """Reads xlsx with openpyxl and legacy xls with xlrd.

    Output per sheet is a ``--- Sheet: <name> ---`` header followed by its rows,
    sheets in workbook order separated by a blank line.
    """

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        try:
            if document.mime_type.split(";", 1)[0].strip().lower() == LEGACY_EXCEL_MIME_TYPE:
                sections = list(self._read_xls(document.content))
            else:
                sections = list(self._read_xlsx(document.content))
        except Exception as exc:
            raise ExtractionFailedError(f"spreadsheet extraction failed: {exc}") from exc
        return ExtractionResult(text="\n\n".join(sections))

    def _read_xlsx(self, content: bytes) -> Iterator[str]:
        workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        try:
            # Chart sheets hold no cells and are not part of ``worksheets``.
            for sheet in workbook.worksheets:
                yield render_sheet(sheet.title, sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

    def _read_xls(self, content: bytes) -> Iterator[str]:
        workbook = xlrd.open_workbook(file_contents=content)
        for sheet in workbook.sheets():
            rows = (
                [_xls_value(cell, workbook.datemode) for cell in sheet.row(index)]
                for index in range(sheet.nrows)
            )
            yield render_sheet(sheet.name, rows)


def render_sheet(name: str, rows: Iterable[Row]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow([_cell_text(value) for value in row])
    body = buffer.getvalue().rstrip("\n")
    header = f"--- Sheet: {name} ---"
    return f"{header}\n{body}" if body else header


def _xls_value(cell: xlrd.sheet.Cell, datemode: int) -> object:
    """xlrd stores dates as serial numbers and booleans as 0/1."""
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_EMPTY:
        return None
    return cell.value


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime) and value.time() == time(0):
        return value.date().isoformat()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)
