"""
Input Handler Module for the Question Bank Builder.

This module provides functionality for:
    - Image media type validation
    - Loading image files into transferable handles
"""

from .image_ingestor import ImageIngestor, ImageHandle

__all__ = ['ImageIngestor', 'ImageHandle']
