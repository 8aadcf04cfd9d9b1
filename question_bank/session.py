"""
Question Bank Session Module.

A session owns the draft and the repository for one run of the
application and wires the pipeline components around them:

    ImageIngestor -> DraftEditor -> TranscriptionService
                          |
                          v
                  QuestionRepository -> SearchProjector
                          |
                          v
              DocumentExporter / ExcelExporter

Usage:
    from question_bank.session import QuestionBankSession

    session = QuestionBankSession()
    session.attach_image("scan.png")
    await session.scan()
    session.set_answer("4")
    session.commit()
    session.export_word().save("outputs")

Author: ML Engineering Team
"""

from datetime import date
from pathlib import Path
from typing import Callable, Optional, Union

from question_bank.utils.logger import get_logger
from question_bank.input_handler.image_ingestor import ImageHandle, ImageIngestor
from question_bank.ocr_engine.transcription import TranscriptionService
from question_bank.draft.editor import DraftEditor, DraftState
from question_bank.repository.records import QuestionRecord
from question_bank.repository.repository import QuestionRepository
from question_bank.repository.search import SearchProjector, SearchView
from question_bank.output_handler.document_tree import DocumentArtifact
from question_bank.output_handler.word_exporter import DocumentExporter
from question_bank.output_handler.excel_exporter import ExcelExporter

# Initialize module logger
logger = get_logger(__name__)


class QuestionBankSession:
    """
    Top-level owner of one editing session.

    Components receive the state they need from the session; nothing is
    shared through module globals, so independent sessions never interfere.

    Attributes:
        draft: The live DraftState
        repository: Committed questions
        editor: DraftEditor operating on draft and repository
        projector: SearchProjector for listings
        document_exporter: Word exporter
        excel_exporter: Spreadsheet exporter
    """

    def __init__(
        self,
        transcription_service: Optional[TranscriptionService] = None,
        ingestor: Optional[ImageIngestor] = None,
        document_exporter: Optional[DocumentExporter] = None,
        excel_exporter: Optional[ExcelExporter] = None,
        id_generator: Optional[Callable[[], str]] = None
    ) -> None:
        self.draft = DraftState()
        self.repository = QuestionRepository()
        self.editor = DraftEditor(
            self.draft,
            self.repository,
            transcription_service or TranscriptionService(),
            ingestor or ImageIngestor(),
            id_generator=id_generator
        )
        self.projector = SearchProjector()
        self.document_exporter = document_exporter or DocumentExporter()
        self._excel_exporter = excel_exporter

        logger.debug("QuestionBankSession created")

    @property
    def excel_exporter(self) -> ExcelExporter:
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    # ------------------------------------------------------------------
    # Draft
    # ------------------------------------------------------------------

    def attach_image(
        self,
        source: Union[str, Path, bytes],
        mime_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> Optional[ImageHandle]:
        return self.editor.attach_image(source, mime_type=mime_type, filename=filename)

    def remove_image(self) -> bool:
        return self.editor.remove_image()

    def set_question(self, text: str) -> None:
        self.editor.set_question(text)

    def set_answer(self, text: str) -> None:
        self.editor.set_answer(text)

    @property
    def can_scan(self) -> bool:
        return self.editor.can_scan

    async def scan(self, on_progress: Optional[Callable[[int], None]] = None) -> bool:
        return await self.editor.scan(on_progress)

    def commit(self) -> Optional[QuestionRecord]:
        return self.editor.commit()

    # ------------------------------------------------------------------
    # Bank
    # ------------------------------------------------------------------

    def delete(self, record_id: str) -> bool:
        return self.repository.delete_by_id(record_id)

    def search(self, query: str = "") -> SearchView:
        return self.projector.project(self.repository.all(), query)

    @property
    def can_export(self) -> bool:
        return not self.repository.is_empty

    def export_word(self, export_date: Optional[date] = None) -> Optional[DocumentArtifact]:
        """Export the bank to Word, or return None if the bank is empty."""
        if not self.can_export:
            logger.warning("Nothing to export: the question bank is empty")
            return None
        return self.document_exporter.export(self.repository.all(), export_date)

    def export_excel(self, export_date: Optional[date] = None) -> Optional[DocumentArtifact]:
        """Export the bank to Excel, or return None if the bank is empty."""
        if not self.can_export:
            logger.warning("Nothing to export: the question bank is empty")
            return None
        return self.excel_exporter.export(self.repository.all(), export_date)
