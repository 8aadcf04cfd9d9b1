"""
Transcription Service Module.

This module provides the TranscriptionService, the asynchronous wrapper
around an OCR worker. One call runs one worker: load, recognize, and
terminate, forwarding "recognizing text" progress as integer percentages.

Usage:
    from question_bank.ocr_engine import TranscriptionService

    service = TranscriptionService()
    text = await service.transcribe(handle, on_progress=print)

Author: ML Engineering Team
"""

import asyncio
from typing import Callable, Optional

from config import get_config
from question_bank.utils.logger import get_logger
from question_bank.utils.exceptions import RecognitionError
from question_bank.input_handler.image_ingestor import ImageHandle
from .tesseract_worker import (
    DEFAULT_LANGUAGES,
    STATUS_RECOGNIZING,
    ProgressEvent,
    ProgressObserver,
    TesseractWorker,
)

# Initialize module logger
logger = get_logger(__name__)


ProgressCallback = Callable[[int], None]
WorkerFactory = Callable[[str, ProgressObserver], TesseractWorker]


def progress_to_percent(progress: float) -> int:
    """
    Map a fractional progress value to an integer percentage.

    Example:
        >>> progress_to_percent(0.555)
        56
        >>> progress_to_percent(1.7)
        100
    """
    return max(0, min(100, int(round(progress * 100))))


class ProgressForwarder:
    """
    Forwards recognition percentages for a single transcription run.

    Values lower than the last forwarded one are dropped so the consumer
    only ever sees a non-decreasing sequence.
    """

    def __init__(self, callback: Optional[ProgressCallback]) -> None:
        self.callback = callback
        self.last_percent = -1

    def forward(self, percent: int) -> None:
        if percent < self.last_percent:
            logger.debug(f"Dropping out-of-order progress {percent}% (< {self.last_percent}%)")
            return
        self.last_percent = percent
        if self.callback is not None:
            self.callback(percent)


class TranscriptionService:
    """
    Runs OCR over staged images.

    The service is stateless between calls: each transcribe() creates its
    own worker and terminates it before returning. It does not guard
    against concurrent calls; the draft editor rejects a second scan.

    Attributes:
        languages: Fixed Tesseract language string used for every run

    Example:
        >>> service = TranscriptionService()
        >>> text = asyncio.run(service.transcribe(handle, print))
    """

    def __init__(
        self,
        worker_factory: Optional[WorkerFactory] = None,
        languages: Optional[str] = None
    ) -> None:
        self.languages = languages or get_config("ocr.languages", DEFAULT_LANGUAGES)
        self._worker_factory = worker_factory or self._default_worker

        logger.debug(f"TranscriptionService initialized (lang={self.languages})")

    @staticmethod
    def _default_worker(languages: str, observer: ProgressObserver) -> TesseractWorker:
        return TesseractWorker(languages=languages, observer=observer)

    async def transcribe(
        self,
        image_handle: Optional[ImageHandle],
        on_progress: Optional[ProgressCallback] = None
    ) -> Optional[str]:
        """
        Recognize the text in an image.

        Args:
            image_handle: Image to recognize. None makes the call a no-op.
            on_progress: Receives integer percentages (0-100) for the
                        "recognizing text" stage, on the event loop thread.

        Returns:
            Recognized text with surrounding whitespace trimmed, or None
            when no image was given.

        Raises:
            RecognitionError: If the worker fails to start or recognize.
        """
        if image_handle is None:
            logger.debug("transcribe() called without an image, ignoring")
            return None

        loop = asyncio.get_running_loop()
        forwarder = ProgressForwarder(on_progress)

        def observe(event: ProgressEvent) -> None:
            # Called from the worker thread
            if event.status != STATUS_RECOGNIZING:
                return
            loop.call_soon_threadsafe(forwarder.forward, progress_to_percent(event.progress))

        try:
            worker = self._worker_factory(self.languages, observe)
        except Exception as e:
            logger.error(f"Could not create OCR worker: {e}")
            raise RecognitionError("initialize", str(e)) from e

        stage = "initialize"
        try:
            await asyncio.to_thread(worker.load)
            stage = "recognize"
            result = await asyncio.to_thread(worker.recognize, image_handle)
        except Exception as e:
            logger.error(f"Transcription failed during {stage}: {e}")
            raise RecognitionError(stage, str(e)) from e
        finally:
            self._terminate(worker)

        text = result.text.strip()
        logger.info(f"Transcribed {len(text)} characters from {image_handle.filename or 'image'}")
        return text

    def _terminate(self, worker: TesseractWorker) -> None:
        try:
            worker.terminate()
        except Exception as e:
            logger.error(f"Failed to terminate OCR worker: {e}")
