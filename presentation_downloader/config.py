"""Run configuration for Presentation Downloader."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import InvalidURLError, ValidationError

ACCEPTED_SCHEMES = ("http://", "https://")

DEFAULT_OUTPUT_DIR = "./presentation_slides"
DEFAULT_OUTPUT_PDF = "./bbb_presentation.pdf"
DEFAULT_PREFIX = "slide"
DEFAULT_PADDING = 3
DEFAULT_DENSITY = 300
DEFAULT_PAGE_WIDTH = 1920
DEFAULT_PAGE_HEIGHT = 1080

RESOURCE_SUFFIX = ".svg"
ARTIFACT_SUFFIX = ".png"


def normalize_base_url(url: Optional[str]) -> str:
    """Validate *url* and return it with a trailing ``/``."""

    if not url or not url.strip():
        raise InvalidURLError("URL parameter is required")

    url = url.strip()
    if not url.startswith(ACCEPTED_SCHEMES):
        raise InvalidURLError(f"URL must start with http:// or https://, got: {url}")

    return url if url.endswith("/") else url + "/"


def resolve_worker_count(hint: Optional[int] = None) -> int:
    """Return the conversion concurrency for a parallelism *hint*.

    One core is left for the rest of the process, but never fewer than two
    workers are used.
    """

    if hint is None:
        hint = os.cpu_count() or 1
    return max(2, hint - 1)


def artifact_path_for(resource_path: str) -> str:
    """Return the PNG path that sits next to the SVG at *resource_path*."""

    return str(Path(resource_path).with_suffix(ARTIFACT_SUFFIX))


@dataclass(frozen=True)
class DownloaderConfig:
    """
    Settings shared by every phase of a run.

    Attributes:
        base_url: Endpoint the slide index is appended to, ends with ``/``
        output_dir: Directory holding the SVG and PNG files
        output_pdf: Location of the finished PDF
        prefix: File name prefix for slides
        padding: Number of digits in slide file names
        density: Rasterization density in DPI
        page_width: Document page width in points
        page_height: Document page height in points
        workers: Explicit conversion concurrency, derived from the CPU count when None
        request_timeout: Per-request timeout in seconds, None waits indefinitely
    """
    base_url: str
    output_dir: str = DEFAULT_OUTPUT_DIR
    output_pdf: str = DEFAULT_OUTPUT_PDF
    prefix: str = DEFAULT_PREFIX
    padding: int = DEFAULT_PADDING
    density: int = DEFAULT_DENSITY
    page_width: int = DEFAULT_PAGE_WIDTH
    page_height: int = DEFAULT_PAGE_HEIGHT
    workers: Optional[int] = None
    request_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))
        if self.workers is not None and self.workers < 1:
            raise ValidationError(f"Worker count must be >= 1, got {self.workers}")
        if self.padding < 1:
            raise ValidationError(f"Padding must be >= 1, got {self.padding}")
        if self.density < 1:
            raise ValidationError(f"Density must be >= 1, got {self.density}")
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValidationError(
                f"Page size must be positive, got {self.page_width}x{self.page_height}"
            )
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValidationError(f"Timeout must be > 0, got {self.request_timeout}")

    @property
    def worker_count(self) -> int:
        if self.workers is not None:
            return self.workers
        return resolve_worker_count()

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    def url_for(self, index: int) -> str:
        return f"{self.base_url}{index}"

    def resource_path(self, index: int) -> str:
        filename = f"{self.prefix}_{index:0{self.padding}d}{RESOURCE_SUFFIX}"
        return str(self.output_path / filename)


__all__ = [
    "ACCEPTED_SCHEMES",
    "DownloaderConfig",
    "artifact_path_for",
    "normalize_base_url",
    "resolve_worker_count",
]
