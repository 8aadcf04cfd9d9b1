"""
Unit Tests for TranscriptionService

The OCR worker is replaced by a scripted fake so progress mapping,
error mapping and worker lifetime can be checked without Tesseract.
"""

import asyncio

import pytest

from question_bank.input_handler.image_ingestor import ImageHandle
from question_bank.ocr_engine.transcription import (
    ProgressForwarder,
    TranscriptionService,
    progress_to_percent,
)
from question_bank.utils.exceptions import OCRError, RecognitionError


@pytest.fixture
def handle() -> ImageHandle:
    return ImageHandle(mime_type="image/png", data=b"fake", filename="scan.png")


def _run(service, handle, on_progress=None):
    return asyncio.run(service.transcribe(handle, on_progress))


class TestTranscribe:

    def test_transcribe_when_success_then_returns_trimmed_text(
        self, transcription_service, worker_factory, handle
    ):
        worker_factory.text = "\n  What is 2+2?  \n\n"
        assert _run(transcription_service, handle) == "What is 2+2?"
        assert worker_factory.recognized == [handle]

    def test_transcribe_when_no_image_then_noop(self, transcription_service, worker_factory):
        assert _run(transcription_service, None) is None
        assert worker_factory.workers == []

    def test_progress_forwarded_only_for_recognition_stage(
        self, transcription_service, worker_factory, handle
    ):
        worker_factory.progress = (0.10, 0.55, 1.0)
        seen = []

        _run(transcription_service, handle, seen.append)

        # Loading/initializing events emitted by the fake are ignored
        assert seen == [10, 55, 100]

    def test_progress_never_decreases_within_a_run(
        self, transcription_service, worker_factory, handle
    ):
        worker_factory.progress = (0.5, 0.3, 0.9, 0.9, 1.0)
        seen = []

        _run(transcription_service, handle, seen.append)

        assert seen == [50, 90, 90, 100]

    def test_worker_configured_with_fixed_languages(
        self, transcription_service, worker_factory, handle
    ):
        _run(transcription_service, handle)
        assert worker_factory.workers[0].languages == "vie+eng"

    def test_worker_terminated_once_on_success(
        self, transcription_service, worker_factory, handle
    ):
        _run(transcription_service, handle)
        assert [w.terminate_calls for w in worker_factory.workers] == [1]

    def test_each_call_uses_a_fresh_worker(
        self, transcription_service, worker_factory, handle
    ):
        _run(transcription_service, handle)
        _run(transcription_service, handle)
        assert [w.terminate_calls for w in worker_factory.workers] == [1, 1]

    def test_transcribe_when_load_fails_then_recognition_error(
        self, transcription_service, worker_factory, handle
    ):
        worker_factory.fail_on = "load"

        with pytest.raises(RecognitionError) as exc_info:
            _run(transcription_service, handle)

        assert exc_info.value.stage == "initialize"
        assert worker_factory.recognized == []
        assert worker_factory.workers[0].terminate_calls == 1

    def test_transcribe_when_recognition_fails_then_recognition_error(
        self, transcription_service, worker_factory, handle
    ):
        worker_factory.fail_on = "recognize"

        with pytest.raises(RecognitionError) as exc_info:
            _run(transcription_service, handle)

        assert exc_info.value.stage == "recognize"
        assert isinstance(exc_info.value.__cause__, OCRError)
        assert worker_factory.workers[0].terminate_calls == 1

    def test_transcribe_when_worker_cannot_be_created_then_recognition_error(self, handle):
        def broken_factory(languages, observer):
            raise RuntimeError("no worker for you")

        service = TranscriptionService(worker_factory=broken_factory)

        with pytest.raises(RecognitionError) as exc_info:
            _run(service, handle)
        assert exc_info.value.stage == "initialize"


class TestProgressMapping:

    @pytest.mark.parametrize("progress,expected", [
        (0.0, 0),
        (0.104, 10),
        (0.555, 56),
        (1.0, 100),
        (-0.2, 0),
        (1.3, 100),
    ])
    def test_progress_to_percent(self, progress, expected):
        assert progress_to_percent(progress) == expected

    def test_forwarder_without_callback_still_tracks_last_value(self):
        forwarder = ProgressForwarder(None)
        forwarder.forward(40)
        forwarder.forward(20)
        assert forwarder.last_percent == 40
