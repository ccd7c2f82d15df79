"""Retention modes and cleanup of intermediate files."""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .config import artifact_path_for
from .exceptions import InvalidModeError
from .types import ArtifactDescriptor, CleanupReport, ResourceDescriptor

LOGGER = logging.getLogger("presentation_downloader.retention")


@dataclass(frozen=True)
class ModePlan:
    """
    Phases a retention mode runs and the files it removes afterwards.

    Attributes:
        convert: Rasterize slides to PNG
        assemble: Build the PDF from the PNGs
        delete_sources: Remove the SVG files once done
        delete_artifacts: Remove the PNG files once done
    """
    convert: bool
    assemble: bool
    delete_sources: bool
    delete_artifacts: bool

    @property
    def needs_cleanup(self) -> bool:
        return self.delete_sources or self.delete_artifacts


class RetentionMode(enum.Enum):
    """The six choices offered once all slides are secured."""

    KEEP_SOURCE = 1
    KEEP_ARTIFACT = 2
    KEEP_BOTH = 3
    DOCUMENT_DELETE_ALL = 4
    DOCUMENT_KEEP_ARTIFACT = 5
    DOCUMENT_KEEP_BOTH = 6

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def plan(self) -> ModePlan:
        return _PLANS[self]

    @classmethod
    def parse(cls, value: object) -> "RetentionMode":
        """Accept a mode, its menu number or its name (case-insensitive)."""

        if isinstance(value, cls):
            return value
        text = str(value).strip() if value is not None else ""
        if text.isdigit():
            try:
                return cls(int(text))
            except ValueError:
                pass
        else:
            key = text.upper().replace("-", "_")
            if key in cls.__members__:
                return cls[key]
        raise InvalidModeError(f"Invalid choice: '{text}'. Expected a number between 1 and 6.")


_LABELS = {
    RetentionMode.KEEP_SOURCE: "Keep SVG files only (smallest size)",
    RetentionMode.KEEP_ARTIFACT: "Convert to PNG files only (medium size, better quality)",
    RetentionMode.KEEP_BOTH: "Convert to PNG and keep both SVG and PNG files (largest size)",
    RetentionMode.DOCUMENT_DELETE_ALL: "Create PDF from PNG + delete image files (smallest PDF)",
    RetentionMode.DOCUMENT_KEEP_ARTIFACT: "Create PDF + keep PNG files",
    RetentionMode.DOCUMENT_KEEP_BOTH: "Create PDF + keep both SVG and PNG files",
}

_PLANS = {
    RetentionMode.KEEP_SOURCE: ModePlan(convert=False, assemble=False, delete_sources=False, delete_artifacts=False),
    RetentionMode.KEEP_ARTIFACT: ModePlan(convert=True, assemble=False, delete_sources=True, delete_artifacts=False),
    RetentionMode.KEEP_BOTH: ModePlan(convert=True, assemble=False, delete_sources=False, delete_artifacts=False),
    RetentionMode.DOCUMENT_DELETE_ALL: ModePlan(convert=True, assemble=True, delete_sources=True, delete_artifacts=True),
    RetentionMode.DOCUMENT_KEEP_ARTIFACT: ModePlan(convert=True, assemble=True, delete_sources=True, delete_artifacts=False),
    RetentionMode.DOCUMENT_KEEP_BOTH: ModePlan(convert=True, assemble=True, delete_sources=False, delete_artifacts=False),
}


class RetentionManager:
    """Delete the files a retention mode does not keep.

    Each file is checked and removed on its own; a missing or undeletable
    file is recorded and the remaining files are still processed.
    """

    def apply(
        self,
        mode: RetentionMode,
        resources: Sequence[ResourceDescriptor],
        artifacts: Sequence[ArtifactDescriptor],
    ) -> CleanupReport:
        plan = mode.plan
        report = CleanupReport()

        if plan.delete_artifacts:
            self._delete(self.artifact_paths(resources, artifacts), report)
        if plan.delete_sources:
            self._delete((resource.path for resource in resources), report)

        LOGGER.info("Cleanup for %s finished: %s", mode.name, report)
        return report

    @staticmethod
    def artifact_paths(
        resources: Sequence[ResourceDescriptor],
        artifacts: Sequence[ArtifactDescriptor],
    ) -> List[str]:
        """Known PNG paths plus the sibling path of every SVG, without duplicates."""

        paths = [artifact.path for artifact in artifacts]
        paths.extend(artifact_path_for(resource.path) for resource in resources)
        return list(dict.fromkeys(paths))

    @staticmethod
    def _delete(paths: Iterable[str], report: CleanupReport) -> None:
        for path in paths:
            if not os.path.exists(path):
                report.missing.append(path)
                continue
            try:
                os.remove(path)
            except OSError as exc:
                LOGGER.error("Failed to delete %s: %s", path, exc)
                report.failed.append(path)
                continue
            LOGGER.debug("Deleted %s", path)
            report.deleted.append(path)


__all__ = ["ModePlan", "RetentionManager", "RetentionMode"]
