"""
Unit Tests for TesseractWorker

pytesseract's entry points are monkeypatched so the worker's stage
events and resource handling can be tested without a Tesseract binary.
"""

import io

import pytest
import pytesseract
from PIL import Image

from question_bank.input_handler.image_ingestor import ImageHandle
from question_bank.ocr_engine.tesseract_worker import (
    STATUS_INITIALIZING_API,
    STATUS_LOADING_CORE,
    STATUS_RECOGNIZING,
    TesseractWorker,
)
from question_bank.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError


@pytest.fixture
def png_handle() -> ImageHandle:
    buffer = io.BytesIO()
    Image.new("RGBA", (40, 20), color="white").save(buffer, format="PNG")
    return ImageHandle(mime_type="image/png", data=buffer.getvalue(), filename="q.png")


@pytest.fixture
def fake_tesseract(monkeypatch):
    calls = {}

    def image_to_string(image, lang=None, config=''):
        calls['lang'] = lang
        calls['config'] = config
        calls['mode'] = image.mode
        return "  Câu hỏi: 2+2?\n"

    monkeypatch.setattr(pytesseract, "get_tesseract_version", lambda: "5.3.0")
    monkeypatch.setattr(pytesseract, "get_languages", lambda config='': ["eng", "vie", "osd"])
    monkeypatch.setattr(pytesseract, "image_to_string", image_to_string)
    return calls


class TestTesseractWorker:

    def test_load_emits_stage_events_in_order(self, fake_tesseract):
        events = []
        worker = TesseractWorker(languages="vie+eng", observer=events.append)

        worker.load()

        assert worker.loaded
        assert events[0].status == STATUS_LOADING_CORE
        assert events[-1].status == STATUS_INITIALIZING_API
        assert all(0.0 <= e.progress <= 1.0 for e in events)
        assert STATUS_RECOGNIZING not in {e.status for e in events}

    def test_load_when_language_missing_then_engine_not_available(self, fake_tesseract):
        worker = TesseractWorker(languages="vie+jpn")
        with pytest.raises(OCREngineNotAvailableError, match="jpn"):
            worker.load()

    def test_load_when_binary_missing_then_engine_not_available(self, monkeypatch):
        def missing():
            raise pytesseract.TesseractNotFoundError()

        monkeypatch.setattr(pytesseract, "get_tesseract_version", missing)
        with pytest.raises(OCREngineNotAvailableError):
            TesseractWorker().load()

    def test_recognize_returns_raw_text_and_reports_progress(self, fake_tesseract, png_handle):
        events = []
        worker = TesseractWorker(languages="vie+eng", observer=events.append)
        worker.load()

        result = worker.recognize(png_handle)

        assert result.text == "  Câu hỏi: 2+2?\n"
        assert fake_tesseract['lang'] == "vie+eng"
        assert fake_tesseract['config'].startswith("--psm 3 --oem 3")
        assert fake_tesseract['mode'] == "RGB"
        recognizing = [e.progress for e in events if e.status == STATUS_RECOGNIZING]
        assert recognizing == [0.0, 1.0]

    def test_recognize_when_not_loaded_then_processing_error(self, png_handle):
        with pytest.raises(OCRProcessingError):
            TesseractWorker().recognize(png_handle)

    def test_recognize_when_tesseract_fails_then_processing_error(
        self, fake_tesseract, monkeypatch, png_handle
    ):
        def failing(image, lang=None, config=''):
            raise RuntimeError("tesseract crashed")

        worker = TesseractWorker()
        worker.load()
        monkeypatch.setattr(pytesseract, "image_to_string", failing)

        with pytest.raises(OCRProcessingError, match="tesseract crashed"):
            worker.recognize(png_handle)

    def test_terminate_releases_worker_and_is_idempotent(self, fake_tesseract, png_handle):
        worker = TesseractWorker()
        worker.load()
        worker.recognize(png_handle)

        worker.terminate()
        worker.terminate()

        assert worker.terminated
        assert not worker.loaded
        with pytest.raises(OCRProcessingError):
            worker.recognize(png_handle)
