"""
Image Ingestor Module.

Turns a dropped or selected image file into a self-contained ImageHandle
that can be previewed inline (data URI), handed to the OCR engine, and
attached to a committed question.

Supports: PNG, JPEG, GIF, BMP, WEBP

Author: ML Engineering Team
"""

import base64
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from PIL import Image

from config import get_config
from question_bank.utils.logger import get_logger
from question_bank.utils.helpers import get_file_extension
from question_bank.utils.exceptions import (
    InvalidMediaTypeError,
    ImageReadError,
    CorruptedImageError
)

# Initialize module logger
logger = get_logger(__name__)


DEFAULT_MIME_TYPES: Dict[str, List[str]] = {
    'image/png': ['.png'],
    'image/jpeg': ['.jpg', '.jpeg'],
    'image/gif': ['.gif'],
    'image/bmp': ['.bmp'],
    'image/webp': ['.webp'],
}


@dataclass(frozen=True)
class ImageHandle:
    """
    Transferable, path-independent image representation.

    Attributes:
        mime_type: Declared media type (e.g. "image/png")
        data: Raw encoded image bytes
        filename: Original filename, informational only
        width: Decoded width in pixels
        height: Decoded height in pixels
    """
    mime_type: str
    data: bytes
    filename: str = ""
    width: int = 0
    height: int = 0

    @property
    def data_uri(self) -> str:
        """Inline-embeddable base64 data URI."""
        encoded = base64.b64encode(self.data).decode('ascii')
        return f"data:{self.mime_type};base64,{encoded}"

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def to_image(self) -> Image.Image:
        """Decode the handle into a Pillow image."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image

    def __repr__(self) -> str:
        return (
            f"ImageHandle(filename='{self.filename}', "
            f"type='{self.mime_type}', "
            f"size={self.width}x{self.height})"
        )


class ImageIngestor:
    """
    Validates and loads a single image file per call.

    Attributes:
        mime_types: Mapping of accepted MIME type to its file extensions

    Example:
        >>> ingestor = ImageIngestor()
        >>> handle = ingestor.ingest("photo_of_exam.jpg")
        >>> handle.data_uri[:22]
        'data:image/jpeg;base64'
    """

    def __init__(self, mime_types: Optional[Dict[str, List[str]]] = None) -> None:
        configured = mime_types or get_config("input.image.mime_types", DEFAULT_MIME_TYPES)

        self.mime_types = {
            mime.lower(): [ext.lower() for ext in extensions]
            for mime, extensions in configured.items()
        }
        self._extension_map = {
            ext: mime
            for mime, extensions in self.mime_types.items()
            for ext in extensions
        }

        logger.debug(f"ImageIngestor initialized with types: {sorted(self.mime_types)}")

    @property
    def supported_extensions(self) -> List[str]:
        return sorted(self._extension_map)

    def resolve_mime_type(
        self,
        mime_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> str:
        """
        Determine and validate the media type of an input.

        A declared MIME type takes precedence; otherwise the type is
        derived from the filename extension.

        Raises:
            InvalidMediaTypeError: If the type is missing or not accepted.
        """
        if mime_type:
            resolved = mime_type.split(';')[0].strip().lower()
        elif filename:
            resolved = self._extension_map.get(get_file_extension(filename), "")
            if not resolved:
                raise InvalidMediaTypeError(
                    get_file_extension(filename) or filename,
                    sorted(self.mime_types)
                )
        else:
            resolved = ""

        if resolved not in self.mime_types:
            raise InvalidMediaTypeError(resolved or "unknown", sorted(self.mime_types))

        return resolved

    def ingest(
        self,
        source: Union[str, Path, bytes],
        mime_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> ImageHandle:
        """
        Load one image file into an ImageHandle.

        Args:
            source: Path to the image file, or its raw bytes.
            mime_type: Declared media type. Required for bytes unless
                      filename carries a supported extension.
            filename: Original filename, used for type detection and display.

        Returns:
            ImageHandle holding a copy of the file contents.

        Raises:
            InvalidMediaTypeError: If the media type is not an accepted image,
                or the declared type does not match the decoded content.
            ImageReadError: If the file is missing, unreadable or empty.
            CorruptedImageError: If Pillow cannot decode the bytes.
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            filename = filename or path.name
            resolved = self.resolve_mime_type(mime_type, filename)
            data = self._read_file(path)
        else:
            resolved = self.resolve_mime_type(mime_type, filename)
            data = bytes(source)
            filename = filename or ""

        if not data:
            raise ImageReadError(filename or "<bytes>", "File is empty")

        (width, height), detected = self._probe(data, filename or "<bytes>")
        if detected and detected != resolved:
            logger.error(f"Media type mismatch for {filename or '<bytes>'}: {resolved} vs {detected}")
            raise InvalidMediaTypeError(resolved, sorted(self.mime_types), detected)

        handle = ImageHandle(
            mime_type=resolved,
            data=data,
            filename=filename,
            width=width,
            height=height
        )
        logger.info(f"Ingested image: {handle.filename or '<bytes>'} ({width}x{height}, {resolved})")
        return handle

    def _read_file(self, path: Path) -> bytes:
        if not path.is_file():
            raise ImageReadError(str(path), "File not found")
        try:
            return path.read_bytes()
        except OSError as e:
            raise ImageReadError(str(path), str(e)) from e

    def _probe(self, data: bytes, source: str):
        """Verify the bytes decode as an image and return its size and media type."""
        try:
            with Image.open(io.BytesIO(data)) as image:
                size = image.size
                detected = Image.MIME.get(image.format)
                image.verify()
            return size, detected
        except Exception as e:
            logger.error(f"Failed to decode image {source}: {e}")
            raise CorruptedImageError(source, str(e)) from e
