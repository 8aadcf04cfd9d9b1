"""
Output Handler Module for the Question Bank Builder.

This module provides functionality for:
    - Mapping the bank onto a structured document tree
    - Word (.docx) generation
    - Excel (.xlsx) generation
"""

from .document_tree import DocumentArtifact, DocumentTree, Paragraph, TextRun
from .docx_writer import DocxWriter
from .word_exporter import DocumentExporter
from .excel_exporter import ExcelExporter

__all__ = [
    'DocumentArtifact',
    'DocumentTree',
    'Paragraph',
    'TextRun',
    'DocxWriter',
    'DocumentExporter',
    'ExcelExporter'
]
