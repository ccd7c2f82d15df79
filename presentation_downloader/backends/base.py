"""Backend protocols for rasterization and document output."""

from __future__ import annotations

from typing import Dict, Protocol


class RasterBackend(Protocol):
    """Protocol for turning vector slide bytes into an encoded bitmap."""

    def rasterize(self, source: bytes, density: int) -> bytes:
        """Render *source* at *density* DPI and return PNG bytes."""


class DocumentWriter(Protocol):
    """A document under construction, owned by a single thread."""

    def new_page(self, width: float, height: float) -> object:
        """Append an empty page and return a backend page handle."""

    def place_image(self, page: object, image_path: str) -> None:
        """Draw the image at *image_path* over the full bounds of *page*."""

    def set_metadata(self, metadata: Dict[str, str]) -> None:
        """Attach document-level metadata."""

    def save(self, destination: str) -> None:
        """Write the document to *destination*."""

    def close(self) -> None:
        """Release the document; called once whether or not it was saved."""


class DocumentBackend(Protocol):
    """Protocol for creating paginated documents."""

    def new_document(self) -> DocumentWriter:
        """Return an empty document writer."""
