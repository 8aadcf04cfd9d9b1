"""
OCR Engine Module for the Question Bank Builder.

This module provides:
    - TesseractWorker: single-use pytesseract worker with progress events
    - TranscriptionService: async wrapper mapping progress and errors
"""

from .tesseract_worker import TesseractWorker, ProgressEvent, RecognitionResult
from .transcription import TranscriptionService, progress_to_percent

__all__ = [
    'TesseractWorker',
    'ProgressEvent',
    'RecognitionResult',
    'TranscriptionService',
    'progress_to_percent'
]
