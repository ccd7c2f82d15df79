"""
Type definitions and dataclasses for Presentation Downloader.

This module defines data structures shared by the fetch, conversion,
assembly and cleanup phases.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    A slide that was downloaded and persisted to disk.

    Attributes:
        index: 1-based slide number the resource was fetched from
        path: Location of the raw SVG on disk
    """
    index: int
    path: str


@dataclass(frozen=True)
class ArtifactDescriptor:
    """
    A rasterized slide produced from exactly one resource.

    Attributes:
        index: Slide number copied from the source resource
        path: Location of the PNG on disk
        byte_size: Size of the encoded PNG in bytes
    """
    index: int
    path: str
    byte_size: int


@dataclass(frozen=True)
class DocumentPage:
    """
    One page of an assembled document.

    Attributes:
        number: 1-based page number within the document
        index: Slide number of the artifact shown on this page
        placed: False when the image could not be drawn and the page is blank
    """
    number: int
    index: int
    placed: bool = True


@dataclass
class AssembledDocument:
    """
    Result of the assembly phase.

    Attributes:
        path: Location of the finished PDF
        pages: Pages in document order
        file_size: Size of the finished PDF in bytes
    """
    path: str
    pages: List[DocumentPage] = field(default_factory=list)
    file_size: int = 0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def slide_order(self) -> List[int]:
        return [page.index for page in self.pages]

    @property
    def blank_pages(self) -> List[int]:
        return [page.number for page in self.pages if not page.placed]


@dataclass
class DocumentInfo:
    """
    Information read back from a finished PDF.

    Attributes:
        num_pages: Number of pages in the PDF
        file_size: File size in bytes
        page_width: Width of the first page in points
        page_height: Height of the first page in points
        title: PDF title metadata
        producer: PDF producer application
    """
    num_pages: int
    file_size: int
    page_width: float = 0.0
    page_height: float = 0.0
    title: Optional[str] = None
    producer: Optional[str] = None


@dataclass
class CleanupReport:
    """
    Outcome of a retention pass.

    Attributes:
        deleted: Files that were removed
        missing: Files that were already gone
        failed: Files that could not be removed
    """
    deleted: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"CleanupReport(deleted={len(self.deleted)}, "
            f"missing={len(self.missing)}, failed={len(self.failed)})"
        )
