"""Parallel SVG to PNG conversion."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .backends.base import RasterBackend
from .backends.pymupdf_backend import PymupdfRasterBackend
from .config import DownloaderConfig, artifact_path_for
from .exceptions import ConversionError, OrderingContractError
from .pool import TaskOutcome, WorkerPool
from .types import ArtifactDescriptor, ResourceDescriptor
from .utils import format_file_size

LOGGER = logging.getLogger("presentation_downloader.converter")

ConversionProgress = Callable[[int, int, Optional[ArtifactDescriptor]], None]


def ensure_ascending(artifacts: Sequence[ArtifactDescriptor]) -> None:
    """Raise :class:`OrderingContractError` unless indices strictly ascend.

    This is the hand-off contract between conversion and assembly: pages
    follow list order, so the list itself must already be in slide order.
    """

    for previous, current in zip(artifacts, artifacts[1:]):
        if current.index <= previous.index:
            raise OrderingContractError(
                f"Artifact for slide {current.index} follows slide {previous.index}"
            )


class ConversionPool:
    """Rasterize persisted slides with bounded concurrency.

    Every slide is converted independently: a slide that cannot be read,
    rendered or written is logged and left out of the result while the
    remaining slides carry on.
    """

    def __init__(
        self,
        config: DownloaderConfig,
        *,
        backend: Optional[RasterBackend] = None,
        progress_callback: Optional[ConversionProgress] = None,
    ) -> None:
        self.config = config
        self.backend = backend or PymupdfRasterBackend()
        self.progress_callback = progress_callback

    @property
    def worker_count(self) -> int:
        return self.config.worker_count

    def convert_one(self, resource: ResourceDescriptor) -> ArtifactDescriptor:
        """Convert a single slide, raising :class:`ConversionError` on failure."""

        destination = Path(artifact_path_for(resource.path))
        try:
            source = Path(resource.path).read_bytes()
            encoded = self.backend.rasterize(source, self.config.density)
            destination.write_bytes(encoded)
        except Exception as exc:
            raise ConversionError(
                f"Failed to convert slide {resource.index}: {exc}"
            ) from exc

        return ArtifactDescriptor(
            index=resource.index,
            path=str(destination),
            byte_size=len(encoded),
        )

    def convert(self, resources: Iterable[ResourceDescriptor]) -> List[ArtifactDescriptor]:
        """Convert *resources* and return the survivors sorted by index."""

        resources = list(resources)
        total = len(resources)
        if not resources:
            return []

        LOGGER.info("Using %d parallel workers", self.worker_count)

        def on_settled(outcome: TaskOutcome[ArtifactDescriptor], settled: int, _: int) -> None:
            resource = resources[outcome.slot]
            if outcome.ok:
                LOGGER.info(
                    "Slide %d converted to PNG (%d/%d) - %s",
                    resource.index,
                    settled,
                    total,
                    format_file_size(outcome.value.byte_size),
                )
            else:
                LOGGER.error("%s (%d/%d)", outcome.error, settled, total)
            if self.progress_callback:
                self.progress_callback(settled, total, outcome.value)

        with WorkerPool(self.worker_count, on_settled=on_settled) as pool:
            for resource in resources:
                pool.submit(self.convert_one, resource)
            outcomes = pool.wait_all()

        artifacts = sorted(
            (outcome.value for outcome in outcomes if outcome.ok),
            key=lambda artifact: artifact.index,
        )
        ensure_ascending(artifacts)

        LOGGER.info("Conversion complete: %d/%d slides converted", len(artifacts), total)
        return artifacts


__all__ = ["ConversionPool", "ensure_ascending"]
