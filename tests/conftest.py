import pytest
import sys
from pathlib import Path
from PIL import Image

# Add project root to sys.path so config and question_bank import without install
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from question_bank.ocr_engine.tesseract_worker import (
    ProgressEvent,
    RecognitionResult,
    STATUS_INITIALIZING,
    STATUS_LOADING_CORE,
    STATUS_RECOGNIZING,
)
from question_bank.ocr_engine.transcription import TranscriptionService
from question_bank.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError


class FakeWorker:
    """Stands in for TesseractWorker; scripted by its factory."""

    def __init__(self, factory, languages, observer):
        self.factory = factory
        self.languages = languages
        self.observer = observer
        self.terminate_calls = 0

    def load(self):
        self.observer(ProgressEvent(STATUS_LOADING_CORE, 0.0))
        self.observer(ProgressEvent(STATUS_LOADING_CORE, 1.0))
        if self.factory.fail_on == "load":
            raise OCREngineNotAvailableError("fake engine")
        self.observer(ProgressEvent(STATUS_INITIALIZING, 0.7))

    def recognize(self, handle):
        self.factory.recognized.append(handle)
        for value in self.factory.progress:
            self.observer(ProgressEvent(STATUS_RECOGNIZING, value))
        if self.factory.fail_on == "recognize":
            raise OCRProcessingError(handle.filename, "fake failure")
        return RecognitionResult(text=self.factory.text, language=self.languages)

    def terminate(self):
        self.terminate_calls += 1


class FakeWorkerFactory:
    def __init__(self):
        self.text = ""
        self.progress = (0.0, 1.0)
        self.fail_on = None
        self.workers = []
        self.recognized = []

    def __call__(self, languages, observer):
        worker = FakeWorker(self, languages, observer)
        self.workers.append(worker)
        return worker


@pytest.fixture
def worker_factory():
    """Scriptable OCR worker factory: set .text, .progress and .fail_on."""
    return FakeWorkerFactory()


@pytest.fixture
def transcription_service(worker_factory):
    return TranscriptionService(worker_factory=worker_factory)


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple PNG image on disk."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def sample_jpeg(tmp_path: Path):
    img = Image.new("RGB", (64, 32), color="gray")
    img_path = tmp_path / "photo.JPG"
    img.save(img_path, format="JPEG")
    return img_path
