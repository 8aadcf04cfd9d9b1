"""
Excel Exporter Module.

This module exports the question bank as a spreadsheet, one row per
question in bank order. Uses openpyxl for modern Excel format support.

Features:
    - Formatted headers
    - Auto-column width
    - Frozen header row

Author: ML Engineering Team
"""

import io
from datetime import date, timezone
from typing import Optional, Sequence

from config import get_config
from question_bank.utils.logger import get_logger
from question_bank.utils.helpers import generate_timestamp
from question_bank.utils.exceptions import EmptyRepositoryError, ExcelExportError
from question_bank.repository.records import QuestionRecord
from .document_tree import DocumentArtifact

# Initialize module logger
logger = get_logger(__name__)


XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExcelExporter:
    """
    Exports question records to an .xlsx artifact.

    Attributes:
        sheet_name: Worksheet title
        filename_pattern: Filename pattern with a {date} field

    Example:
        >>> exporter = ExcelExporter()
        >>> artifact = exporter.export(repo.all())
        >>> artifact.save("outputs")
    """

    # Column definitions
    COLUMNS = [
        ('No.', 8),
        ('Question', 60),
        ('Answer', 40),
        ('Has Image', 12),
    ]

    def __init__(self) -> None:
        self.sheet_name = get_config("export.excel.sheet_name", "Question Bank")
        self.filename_pattern = get_config(
            "export.excel.filename_pattern",
            "QuestionBank_{date}.xlsx"
        )

        self._check_dependencies()

        logger.debug(f"ExcelExporter initialized (sheet: {self.sheet_name})")

    def _check_dependencies(self) -> None:
        """Check if required libraries are available."""
        try:
            import openpyxl
            self._openpyxl = openpyxl
        except ImportError:
            raise ImportError(
                "openpyxl is required for Excel export. "
                "Install with: pip install openpyxl"
            )

    def get_default_filename(self, export_date: Optional[date] = None) -> str:
        return self.filename_pattern.format(date=generate_timestamp("%Y-%m-%d", export_date, tz=timezone.utc))

    def export(
        self,
        records: Sequence[QuestionRecord],
        export_date: Optional[date] = None
    ) -> DocumentArtifact:
        """
        Export records to an Excel workbook.

        Raises:
            EmptyRepositoryError: If records is empty.
            ExcelExportError: If the workbook cannot be written.
        """
        if not records:
            raise EmptyRepositoryError("xlsx")

        filename = self.get_default_filename(export_date)

        try:
            workbook = self._openpyxl.Workbook()
            self._create_data_sheet(workbook, records)

            buffer = io.BytesIO()
            workbook.save(buffer)
        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(filename, str(e)) from e

        logger.info(f"Excel file generated: {filename} ({len(records)} questions)")
        return DocumentArtifact(
            filename=filename,
            content=buffer.getvalue(),
            media_type=XLSX_MEDIA_TYPE,
            record_count=len(records)
        )

    def _create_data_sheet(self, workbook, records: Sequence[QuestionRecord]) -> None:
        from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
        from openpyxl.utils import get_column_letter

        sheet = workbook.active
        sheet.title = self.sheet_name

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        wrap_alignment = Alignment(wrap_text=True, vertical="top")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, (header_name, _) in enumerate(self.COLUMNS, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border

        for row_num, record in enumerate(records, 2):
            values = (
                row_num - 1,
                record.question,
                record.answer,
                "Yes" if record.has_image else "No",
            )
            for col, value in enumerate(values, 1):
                cell = sheet.cell(row=row_num, column=col, value=value)
                cell.border = thin_border
                cell.alignment = wrap_alignment

        for col, (header_name, max_width) in enumerate(self.COLUMNS, 1):
            max_length = len(header_name)
            for row in range(2, len(records) + 2):
                cell_value = sheet.cell(row=row, column=col).value
                if cell_value:
                    max_length = max(max_length, len(str(cell_value)))

            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, max_width)

        sheet.freeze_panes = 'A2'
