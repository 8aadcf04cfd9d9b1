"""
Tesseract OCR Worker.

This module wraps pytesseract in a short-lived worker object: it is
loaded for a fixed language combination, recognizes one image, and is
terminated. While it runs it reports progress events labelled with the
same stage names Tesseract.js uses, so callers can render a progress bar.

Requirements:
    - Tesseract OCR installed on the system, with every configured
      language's traineddata available
    - pytesseract Python package

Author: ML Engineering Team
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from PIL import Image

from config import get_config
from question_bank.utils.logger import get_logger
from question_bank.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError
from question_bank.input_handler.image_ingestor import ImageHandle

# Initialize module logger
logger = get_logger(__name__)


DEFAULT_LANGUAGES = "vie+eng"

# Stage labels
STATUS_LOADING_CORE = "loading tesseract core"
STATUS_INITIALIZING = "initializing tesseract"
STATUS_LOADING_LANGUAGES = "loading language traineddata"
STATUS_INITIALIZING_API = "initializing api"
STATUS_RECOGNIZING = "recognizing text"


@dataclass(frozen=True)
class ProgressEvent:
    """
    A single observer event emitted by an OCR worker.

    Attributes:
        status: Stage label (e.g. "recognizing text")
        progress: Fractional completion of the stage in [0, 1]
    """
    status: str
    progress: float


@dataclass
class RecognitionResult:
    """Raw text returned by a worker, before any trimming."""
    text: str
    language: str
    processing_time: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)


ProgressObserver = Callable[[ProgressEvent], None]


class TesseractWorker:
    """
    Single-use Tesseract worker.

    Attributes:
        languages: Tesseract language string, e.g. "vie+eng"
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        extra_config: Additional Tesseract configuration
        terminated: Whether terminate() has been called

    Example:
        >>> worker = TesseractWorker(observer=print)
        >>> worker.load()
        >>> try:
        ...     result = worker.recognize(handle)
        ... finally:
        ...     worker.terminate()
    """

    def __init__(
        self,
        languages: Optional[str] = None,
        observer: Optional[ProgressObserver] = None
    ) -> None:
        self.languages = languages or get_config("ocr.languages", DEFAULT_LANGUAGES)
        self.psm = get_config("ocr.tesseract.psm", 3)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.extra_config = get_config("ocr.tesseract.config", "")
        self.tesseract_cmd = get_config("ocr.tesseract.cmd", "")

        self._observer = observer
        self._pytesseract = None
        self._images: List[Image.Image] = []
        self.loaded = False
        self.terminated = False

    def _emit(self, status: str, progress: float) -> None:
        if self._observer is not None:
            self._observer(ProgressEvent(status=status, progress=progress))

    def load(self) -> None:
        """
        Locate Tesseract and check the configured languages are installed.

        Raises:
            OCREngineNotAvailableError: If pytesseract, the tesseract binary,
                or one of the languages is missing.
        """
        self._emit(STATUS_LOADING_CORE, 0.0)
        try:
            import pytesseract
        except ImportError:
            raise OCREngineNotAvailableError(
                "pytesseract (install with: pip install pytesseract)"
            )

        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
        self._pytesseract = pytesseract
        self._emit(STATUS_LOADING_CORE, 1.0)

        self._emit(STATUS_INITIALIZING, 0.0)
        try:
            version = pytesseract.get_tesseract_version()
        except Exception as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )
        logger.debug(f"Tesseract version: {version}")
        self._emit(STATUS_INITIALIZING, 1.0)

        self._emit(STATUS_LOADING_LANGUAGES, 0.0)
        missing = self._missing_languages()
        if missing:
            raise OCREngineNotAvailableError(
                f"Tesseract language data missing: {', '.join(missing)}"
            )
        self._emit(STATUS_LOADING_LANGUAGES, 1.0)

        self._emit(STATUS_INITIALIZING_API, 1.0)
        self.loaded = True
        logger.debug(
            f"TesseractWorker loaded (lang={self.languages}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    def _missing_languages(self) -> List[str]:
        try:
            available = set(self._pytesseract.get_languages(config=''))
        except Exception as e:
            logger.debug(f"Could not list languages, skipping check: {e}")
            return []
        return [lang for lang in self.languages.split('+') if lang not in available]

    def _build_config(self) -> str:
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def recognize(self, handle: ImageHandle) -> RecognitionResult:
        """
        Recognize the text in an image.

        Args:
            handle: Image to recognize.

        Returns:
            RecognitionResult with the raw recognized text.

        Raises:
            OCRProcessingError: If the worker is not loaded or recognition fails.
        """
        if not self.loaded or self.terminated:
            raise OCRProcessingError(handle.filename or "image", "Worker is not loaded")

        start_time = time.time()
        self._emit(STATUS_RECOGNIZING, 0.0)

        try:
            image = handle.to_image()
            self._images.append(image)
            if image.mode not in ('RGB', 'L'):
                image = image.convert('RGB')
                self._images.append(image)

            text = self._pytesseract.image_to_string(
                image,
                lang=self.languages,
                config=self._build_config()
            )
        except Exception as e:
            logger.error(f"OCR processing failed: {e}")
            raise OCRProcessingError(handle.filename or "image", str(e)) from e

        self._emit(STATUS_RECOGNIZING, 1.0)
        processing_time = time.time() - start_time

        logger.info(f"OCR completed: {len(text)} characters ({processing_time:.2f}s)")
        return RecognitionResult(
            text=text,
            language=self.languages,
            processing_time=processing_time,
            metadata={'psm': self.psm, 'oem': self.oem}
        )

    def terminate(self) -> None:
        """Release decoded images held by the worker. Safe to call twice."""
        if self.terminated:
            return
        for image in self._images:
            image.close()
        self._images.clear()
        self._pytesseract = None
        self.loaded = False
        self.terminated = True
        logger.debug("TesseractWorker terminated")
