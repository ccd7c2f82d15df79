"""PyMuPDF backend implementation for Presentation Downloader."""

from __future__ import annotations

import io
from typing import Dict

import pymupdf
from PIL import Image

from .base import DocumentBackend, DocumentWriter, RasterBackend

PNG_COMPRESS_LEVEL = 9


class PymupdfRasterBackend(RasterBackend):
    """Render SVG with PyMuPDF and encode the pixels as PNG with Pillow."""

    def rasterize(self, source: bytes, density: int) -> bytes:
        with pymupdf.open(stream=source, filetype="svg") as document:
            if document.page_count == 0:
                raise ValueError("SVG produced no renderable page")
            pixmap = document[0].get_pixmap(dpi=density, alpha=False)

        image = Image.frombytes(
            "RGB",
            (pixmap.width, pixmap.height),
            pixmap.samples,
            "raw",
            "RGB",
            pixmap.stride,
        )
        buffer = io.BytesIO()
        image.save(buffer, format="PNG", compress_level=PNG_COMPRESS_LEVEL)
        return buffer.getvalue()


class PymupdfDocumentWriter(DocumentWriter):
    """Wraps an in-memory :class:`pymupdf.Document` being filled page by page."""

    def __init__(self) -> None:
        self._document = pymupdf.open()

    def new_page(self, width: float, height: float) -> pymupdf.Page:
        return self._document.new_page(width=width, height=height)

    def place_image(self, page: pymupdf.Page, image_path: str) -> None:
        page.insert_image(page.rect, filename=image_path, keep_proportion=False)

    def set_metadata(self, metadata: Dict[str, str]) -> None:
        self._document.set_metadata(metadata)

    def save(self, destination: str) -> None:
        self._document.save(destination, garbage=3, deflate=True)

    def close(self) -> None:
        if not self._document.is_closed:
            self._document.close()


class PymupdfDocumentBackend(DocumentBackend):
    """Backend implementation that uses `PyMuPDF` to build PDFs."""

    def new_document(self) -> PymupdfDocumentWriter:
        return PymupdfDocumentWriter()
