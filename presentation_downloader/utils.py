"""Utility functions for inspecting output files."""

from __future__ import annotations

import os

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .exceptions import AssemblyError
from .types import DocumentInfo


def inspect_document(pdf_path: str) -> DocumentInfo:
    """Read a finished PDF back and describe it with :class:`DocumentInfo`."""

    if not os.path.isfile(pdf_path):
        raise AssemblyError(f"PDF file not found: {pdf_path}")

    try:
        reader = PdfReader(pdf_path)
    except PdfReadError as exc:
        raise AssemblyError(f"Corrupted or invalid PDF file: {pdf_path}. Error: {exc}") from exc

    num_pages = len(reader.pages)
    width = height = 0.0
    if num_pages:
        box = reader.pages[0].mediabox
        width, height = float(box.width), float(box.height)

    metadata = reader.metadata
    return DocumentInfo(
        num_pages=num_pages,
        file_size=os.path.getsize(pdf_path),
        page_width=width,
        page_height=height,
        title=metadata.title if metadata else None,
        producer=metadata.producer if metadata else None,
    )


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500.0 KB")
    """
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"
