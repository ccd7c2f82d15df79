"""
Presentation Downloader - Turn a web presentation's SVG slides into a PDF.

Slides served as ``{base_url}1``, ``{base_url}2``, ... are downloaded one at
a time until the first missing index, rasterized to PNG in parallel, and
assembled into a single 1920x1080 PDF in slide order.

Quick Start:
    >>> from presentation_downloader import DownloaderConfig, PresentationPipeline, RetentionMode
    >>> config = DownloaderConfig(base_url='https://example.com/slides/svg/')
    >>> result = PresentationPipeline(config).run(RetentionMode.DOCUMENT_KEEP_BOTH)

Main Classes:
    - PresentationPipeline: Runs the fetch, convert, assemble and cleanup phases
    - SlideFetcher: Sequential download until the first absent slide
    - ConversionPool: Bounded parallel SVG to PNG conversion
    - Assembler: One full-bleed page per PNG
    - RetentionManager: Removes files a retention mode does not keep

For CLI usage, use the 'presentation-downloader' command after installation.
"""

__version__ = "1.0.0"
__author__ = "Presentation Downloader Contributors"
__license__ = "MIT"

# Core classes
from presentation_downloader.assembler import Assembler
from presentation_downloader.config import DownloaderConfig, normalize_base_url, resolve_worker_count
from presentation_downloader.converter import ConversionPool, ensure_ascending
from presentation_downloader.fetcher import SlideFetcher
from presentation_downloader.pipeline import PresentationPipeline, RunResult, RunState
from presentation_downloader.pool import TaskOutcome, WorkerPool
from presentation_downloader.retention import ModePlan, RetentionManager, RetentionMode

# Data types
from presentation_downloader.types import (
    ArtifactDescriptor,
    AssembledDocument,
    CleanupReport,
    DocumentInfo,
    DocumentPage,
    ResourceDescriptor,
)

# Exceptions
from presentation_downloader.exceptions import (
    PresentationDownloaderException,
    ValidationError,
    InvalidURLError,
    InvalidModeError,
    ZeroResourcesError,
    StorageError,
    ConversionError,
    PagePlacementError,
    NoArtifactsError,
    AssemblyError,
    OrderingContractError,
)

# Utility functions
from presentation_downloader.utils import format_file_size, inspect_document

__all__ = [
    # Main classes
    "PresentationPipeline",
    "SlideFetcher",
    "ConversionPool",
    "Assembler",
    "RetentionManager",
    "WorkerPool",
    # Configuration
    "DownloaderConfig",
    "normalize_base_url",
    "resolve_worker_count",
    # Data types
    "ResourceDescriptor",
    "ArtifactDescriptor",
    "AssembledDocument",
    "DocumentPage",
    "DocumentInfo",
    "CleanupReport",
    "RunResult",
    "RunState",
    "RetentionMode",
    "ModePlan",
    "TaskOutcome",
    # Exceptions
    "PresentationDownloaderException",
    "ValidationError",
    "InvalidURLError",
    "InvalidModeError",
    "ZeroResourcesError",
    "StorageError",
    "ConversionError",
    "PagePlacementError",
    "NoArtifactsError",
    "AssemblyError",
    "OrderingContractError",
    # Utility functions
    "ensure_ascending",
    "format_file_size",
    "inspect_document",
    # Version info
    "__version__",
]
