"""
Draft Editor Module.

Holds the question being edited and drives its lifecycle: staging an
image, scanning it into the question field, and committing the draft
into the repository.

State machine:
    IDLE --scan()--> SCANNING --success/failure--> IDLE

Author: ML Engineering Team
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from question_bank.utils.logger import get_logger
from question_bank.utils.helpers import is_blank
from question_bank.utils.exceptions import RecognitionError
from question_bank.input_handler.image_ingestor import ImageHandle, ImageIngestor
from question_bank.ocr_engine.transcription import TranscriptionService
from question_bank.repository.records import IdGenerator, QuestionRecord
from question_bank.repository.repository import QuestionRepository

# Initialize module logger
logger = get_logger(__name__)


class ScanState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"


@dataclass
class DraftState:
    """
    The single live draft of a session.

    Attributes:
        question: Question text buffer
        answer: Answer text buffer
        image_handle: Staged image, if any
        progress: Recognition progress 0-100, only meaningful while scanning
        scan_state: IDLE or SCANNING
    """
    question: str = ""
    answer: str = ""
    image_handle: Optional[ImageHandle] = None
    progress: int = 0
    scan_state: ScanState = ScanState.IDLE

    @property
    def is_scanning(self) -> bool:
        return self.scan_state is ScanState.SCANNING

    def clear(self) -> None:
        self.question = ""
        self.answer = ""
        self.image_handle = None


class DraftEditor:
    """
    Mutates a DraftState on behalf of the user and the OCR service.

    Attributes:
        state: The draft being edited
        repository: Where committed drafts are appended

    Example:
        >>> editor = DraftEditor(DraftState(), QuestionRepository(),
        ...                      TranscriptionService(), ImageIngestor())
        >>> editor.attach_image("scan.png")
        >>> await editor.scan()
        True
        >>> editor.set_answer("4")
        >>> editor.commit()
        QuestionRecord(id='...', question='What is 2+2?', has_image=True)
    """

    def __init__(
        self,
        state: DraftState,
        repository: QuestionRepository,
        transcription_service: TranscriptionService,
        ingestor: ImageIngestor,
        id_generator: Optional[Callable[[], str]] = None
    ) -> None:
        self.state = state
        self.repository = repository
        self.transcription_service = transcription_service
        self.ingestor = ingestor
        self._next_id = id_generator or IdGenerator()

    # ------------------------------------------------------------------
    # Text fields
    # ------------------------------------------------------------------

    def set_question(self, text: str) -> None:
        self.state.question = text

    def set_answer(self, text: str) -> None:
        self.state.answer = text

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------

    def attach_image(
        self,
        source: Union[str, Path, bytes],
        mime_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> Optional[ImageHandle]:
        """
        Ingest an image and stage it, replacing any staged image.

        Returns:
            The new handle, or None when rejected because a scan is running.

        Raises:
            InputError: If ingestion fails. The draft is left unchanged.
        """
        if self.state.is_scanning:
            logger.warning("Cannot replace the image while a scan is running")
            return None

        handle = self.ingestor.ingest(source, mime_type=mime_type, filename=filename)

        if self.state.image_handle is not None:
            logger.debug(f"Replacing staged image {self.state.image_handle.filename!r}")
        self.state.image_handle = handle
        return handle

    def remove_image(self) -> bool:
        """Clear the staged image. Returns False if scanning or nothing staged."""
        if self.state.is_scanning or self.state.image_handle is None:
            return False
        self.state.image_handle = None
        return True

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    @property
    def can_scan(self) -> bool:
        return self.state.image_handle is not None and not self.state.is_scanning

    async def scan(self, on_progress: Optional[Callable[[int], None]] = None) -> bool:
        """
        Run OCR over the staged image and put the text in the question field.

        Failures are logged and leave the question untouched; the user can
        simply scan again.

        Args:
            on_progress: Optional listener notified after each progress update.

        Returns:
            True if the question was replaced with recognized text.
        """
        if not self.can_scan:
            reason = "scan already running" if self.state.is_scanning else "no image staged"
            logger.warning(f"Scan rejected: {reason}")
            return False

        self.state.scan_state = ScanState.SCANNING
        self.state.progress = 0

        def update_progress(percent: int) -> None:
            self.state.progress = percent
            if on_progress is not None:
                on_progress(percent)

        try:
            text = await self.transcription_service.transcribe(
                self.state.image_handle,
                update_progress
            )
        except RecognitionError as e:
            logger.error(f"Scan failed, question left unchanged: {e}")
            return False
        finally:
            self.state.scan_state = ScanState.IDLE
            self.state.progress = 0

        if text is None:
            return False

        self.state.question = text
        return True

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def commit(self) -> Optional[QuestionRecord]:
        """
        Turn the draft into a repository record and reset the draft.

        Returns:
            The committed record, or None if question and answer are
            both blank (nothing is appended or cleared).
        """
        if is_blank(self.state.question) and is_blank(self.state.answer):
            logger.debug("Commit ignored: question and answer are empty")
            return None

        record = QuestionRecord(
            id=self._next_id(),
            question=self.state.question.strip(),
            answer=self.state.answer.strip(),
            image=self.state.image_handle
        )
        self.repository.append(record)
        self.state.clear()

        logger.info(f"Committed question {record.id} (bank size: {len(self.repository)})")
        return record
