"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the question
bank builder. Every failure in the capture-and-curation pipeline is
recoverable; specific exception types let each layer decide whether to
reject, log, or surface an error.

Exception Hierarchy:
    QuestionBankError (base)
    ├── InputError
    │   ├── InvalidMediaTypeError
    │   ├── ImageReadError
    │   └── CorruptedImageError
    ├── OCRError
    │   ├── OCREngineNotAvailableError
    │   ├── OCRProcessingError
    │   └── RecognitionError
    ├── RepositoryError
    │   └── DuplicateRecordError
    └── OutputError
        ├── EmptyRepositoryError
        ├── DocumentExportError
        └── ExcelExportError
"""


class QuestionBankError(Exception):
    """
    Base exception for all question bank errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(QuestionBankError):
    """Base exception for image ingestion errors."""
    pass


class InvalidMediaTypeError(InputError):
    """
    Raised when a file is not one of the accepted image media types, or
    when its declared type does not match the decoded image content.

    Example:
        >>> raise InvalidMediaTypeError("application/pdf", ["image/png"])
    """

    def __init__(self, media_type: str, supported_types: list, detected_type: str = None):
        if detected_type:
            message = (
                f"Declared media type '{media_type}' does not match "
                f"image content '{detected_type}'"
            )
        else:
            message = f"Unsupported media type: '{media_type}'"
        details = {"media_type": media_type, "supported_types": supported_types}
        if detected_type:
            details["detected_type"] = detected_type
        super().__init__(message, details)


class ImageReadError(InputError):
    """Raised when an image file cannot be found or read."""

    def __init__(self, source: str, reason: str = None):
        message = f"Could not read image: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


class CorruptedImageError(InputError):
    """Raised when image bytes cannot be decoded."""

    def __init__(self, source: str, reason: str = None):
        message = f"Corrupted or undecodable image: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(QuestionBankError):
    """Base exception for OCR-related errors."""
    pass


class OCREngineNotAvailableError(OCRError):
    """Raised when the OCR engine or a required language is not available."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        super().__init__(message, details)


class OCRProcessingError(OCRError):
    """Raised by the OCR worker when recognition itself fails."""

    def __init__(self, source: str, reason: str = None):
        message = f"OCR processing failed for: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


class RecognitionError(OCRError):
    """
    Raised by the transcription service for any failed run.

    Wraps worker initialization and recognition failures so callers
    only have one type to recover from.
    """

    def __init__(self, stage: str, reason: str = None):
        message = f"Text recognition failed during {stage}"
        details = {"stage": stage, "reason": reason}
        self.stage = stage
        super().__init__(message, details)


# =============================================================================
# REPOSITORY ERRORS
# =============================================================================

class RepositoryError(QuestionBankError):
    """Base exception for question repository errors."""
    pass


class DuplicateRecordError(RepositoryError):
    """Raised when a record id is already present in the repository."""

    def __init__(self, record_id: str):
        message = f"Duplicate question id: {record_id}"
        details = {"id": record_id}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(QuestionBankError):
    """Base exception for export errors."""
    pass


class EmptyRepositoryError(OutputError):
    """Raised when an export is requested for an empty question bank."""

    def __init__(self, export_format: str):
        message = "No questions to export"
        details = {"format": export_format}
        super().__init__(message, details)


class DocumentExportError(OutputError):
    """Raised when Word document serialization fails."""

    def __init__(self, filename: str, reason: str = None):
        message = f"Failed to export Word document: {filename}"
        details = {"filename": filename, "reason": reason}
        super().__init__(message, details)


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filename: str, reason: str = None):
        message = f"Failed to export Excel file: {filename}"
        details = {"filename": filename, "reason": reason}
        super().__init__(message, details)


# Export all exceptions
__all__ = [
    'QuestionBankError',
    'InputError',
    'InvalidMediaTypeError',
    'ImageReadError',
    'CorruptedImageError',
    'OCRError',
    'OCREngineNotAvailableError',
    'OCRProcessingError',
    'RecognitionError',
    'RepositoryError',
    'DuplicateRecordError',
    'OutputError',
    'EmptyRepositoryError',
    'DocumentExportError',
    'ExcelExportError',
]
