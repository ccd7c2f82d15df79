"""Backend abstractions for Presentation Downloader."""

from .base import DocumentBackend, DocumentWriter, RasterBackend
from .pymupdf_backend import PymupdfDocumentBackend, PymupdfRasterBackend

__all__ = [
    "DocumentBackend",
    "DocumentWriter",
    "RasterBackend",
    "PymupdfDocumentBackend",
    "PymupdfRasterBackend",
]
