"""Assembly of rasterized slides into a single PDF."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .backends.base import DocumentBackend
from .backends.pymupdf_backend import PymupdfDocumentBackend
from .config import DownloaderConfig
from .converter import ensure_ascending
from .exceptions import AssemblyError, NoArtifactsError, PagePlacementError
from .types import ArtifactDescriptor, AssembledDocument, DocumentPage
from .utils import format_file_size

LOGGER = logging.getLogger("presentation_downloader.assembler")

PRODUCER = "presentation_downloader"


class Assembler:
    """Place one artifact per page, full bleed, in list order.

    The artifact list must already be sorted by slide index; it is checked
    but never reordered. A page whose image cannot be drawn stays blank and
    assembly continues. Failing to write the finished file is fatal.
    """

    def __init__(
        self,
        config: DownloaderConfig,
        *,
        backend: Optional[DocumentBackend] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.config = config
        self.backend = backend or PymupdfDocumentBackend()
        self.progress_callback = progress_callback

    def build(self, artifacts: Sequence[ArtifactDescriptor]) -> AssembledDocument:
        """Assemble *artifacts*, raising :class:`NoArtifactsError` when empty."""

        if not artifacts:
            raise NoArtifactsError()
        ensure_ascending(artifacts)

        destination = Path(self.config.output_pdf)
        writer = self.backend.new_document()
        try:
            pages = self._fill(writer, artifacts)
            writer.set_metadata({"title": destination.stem, "producer": PRODUCER})
            self._finalize(writer, destination)
        finally:
            writer.close()

        file_size = os.path.getsize(destination)
        LOGGER.info(
            "PDF created successfully: %s (%s)", destination, format_file_size(file_size)
        )
        return AssembledDocument(path=str(destination), pages=pages, file_size=file_size)

    def _fill(self, writer, artifacts: Sequence[ArtifactDescriptor]) -> List[DocumentPage]:
        width, height = self.config.page_width, self.config.page_height
        pages: List[DocumentPage] = []
        total = len(artifacts)

        for position, artifact in enumerate(artifacts, start=1):
            page = writer.new_page(width, height)
            try:
                self._place(writer, page, artifact)
                placed = True
                LOGGER.debug("Added slide %d to PDF (%d/%d)", artifact.index, position, total)
            except PagePlacementError as exc:
                placed = False
                LOGGER.error("%s", exc)

            pages.append(DocumentPage(number=position, index=artifact.index, placed=placed))
            if self.progress_callback:
                self.progress_callback(position, total)
        return pages

    @staticmethod
    def _finalize(writer, destination: Path) -> None:
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            writer.save(str(destination))
        except Exception as exc:
            LOGGER.error("Error writing PDF to %s: %s", destination, exc)
            raise AssemblyError(f"Failed to write PDF to {destination}: {exc}") from exc

    def assemble(self, artifacts: Sequence[ArtifactDescriptor]) -> Optional[AssembledDocument]:
        """Assemble *artifacts*; an empty list is logged and yields ``None``."""

        try:
            return self.build(artifacts)
        except NoArtifactsError as exc:
            LOGGER.error("%s", exc)
            return None

    @staticmethod
    def _place(writer, page: object, artifact: ArtifactDescriptor) -> None:
        try:
            writer.place_image(page, artifact.path)
        except Exception as exc:
            raise PagePlacementError(
                f"Error adding slide {artifact.index} to PDF: {exc}"
            ) from exc


__all__ = ["Assembler", "PRODUCER"]
