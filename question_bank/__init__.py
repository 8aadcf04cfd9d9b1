"""
Question Bank Builder - Source Package.

Capture question/answer pairs by typing them or by OCR-scanning a photo
of the question, curate them in memory, and export the bank as a Word
document.

Modules:
    - input_handler: image validation and loading
    - ocr_engine: Tesseract worker and async transcription service
    - draft: editable draft and its scan/commit lifecycle
    - repository: committed questions and search projection
    - output_handler: Word and Excel export
    - session: top-level owner wiring the pipeline together
    - utils: logging, exceptions, helpers

Architecture:
    Image → OCR → Draft → Repository → Search
                              ↓
                           Export
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'input_handler',
    'ocr_engine',
    'draft',
    'repository',
    'output_handler',
    'session',
    'utils'
]
