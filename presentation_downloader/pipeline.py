"""End-to-end run: secure slides, then convert, assemble and clean up."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .assembler import Assembler
from .config import DownloaderConfig
from .converter import ConversionPool
from .exceptions import AssemblyError
from .fetcher import SlideFetcher
from .retention import RetentionManager, RetentionMode
from .types import ArtifactDescriptor, AssembledDocument, CleanupReport, ResourceDescriptor

LOGGER = logging.getLogger("presentation_downloader.pipeline")


class RunState(enum.Enum):
    FETCHING = "fetching"
    SECURED = "secured"
    CONVERTING = "converting"
    ASSEMBLING = "assembling"
    CLEANUP = "cleanup"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunResult:
    """
    Outcome of processing a secured presentation.

    Attributes:
        mode: Retention mode that was applied
        resources: Slides secured by the fetch phase
        artifacts: PNGs that survived conversion, in slide order
        document: Finished PDF, None when no document was built
        cleanup: Files removed by the retention pass, None when skipped
        completed: Whether every phase of the mode finished
    """
    mode: RetentionMode
    resources: List[ResourceDescriptor]
    artifacts: List[ArtifactDescriptor] = field(default_factory=list)
    document: Optional[AssembledDocument] = None
    cleanup: Optional[CleanupReport] = None
    completed: bool = True

    def __str__(self) -> str:
        return (
            f"RunResult(mode={self.mode.name}, slides={len(self.resources)}, "
            f"converted={len(self.artifacts)}, "
            f"pages={self.document.page_count if self.document else 0}, "
            f"completed={self.completed})"
        )


class PresentationPipeline:
    """Drive a run through its phases for one :class:`DownloaderConfig`.

    Fetching always happens first and must secure at least one slide.
    Conversion, assembly and cleanup are entered or skipped according to
    the selected :class:`RetentionMode`.
    """

    def __init__(
        self,
        config: DownloaderConfig,
        *,
        fetcher: Optional[SlideFetcher] = None,
        converter: Optional[ConversionPool] = None,
        assembler: Optional[Assembler] = None,
        retention: Optional[RetentionManager] = None,
        on_state: Optional[Callable[[RunState], None]] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or SlideFetcher(config)
        self.converter = converter or ConversionPool(config)
        self.assembler = assembler or Assembler(config)
        self.retention = retention or RetentionManager()
        self.on_state = on_state
        self.state = RunState.FETCHING
        self.history: List[RunState] = []

    def _enter(self, state: RunState) -> None:
        self.state = state
        self.history.append(state)
        LOGGER.debug("Run state: %s", state.value)
        if self.on_state:
            self.on_state(state)

    def secure(self) -> List[ResourceDescriptor]:
        """Download and persist every slide before anything else happens."""

        self._enter(RunState.FETCHING)
        try:
            resources = self.fetcher.fetch_all()
        except Exception:
            self._enter(RunState.FAILED)
            raise
        self._enter(RunState.SECURED)
        LOGGER.info("All %d slides are saved in %s", len(resources), self.config.output_dir)
        return resources

    def process(
        self,
        mode: RetentionMode,
        resources: Sequence[ResourceDescriptor],
    ) -> RunResult:
        """Run the phases *mode* asks for over already secured *resources*."""

        plan = mode.plan
        result = RunResult(mode=mode, resources=list(resources))

        if plan.convert:
            self._enter(RunState.CONVERTING)
            result.artifacts = self.converter.convert(resources)
            if not result.artifacts:
                result.completed = False
                LOGGER.warning("No slides were converted")

        if plan.assemble:
            self._enter(RunState.ASSEMBLING)
            try:
                result.document = self.assembler.assemble(result.artifacts)
            except AssemblyError:
                self._enter(RunState.FAILED)
                raise
            if result.document is None:
                result.completed = False
                LOGGER.warning("No document was created")

        if plan.needs_cleanup and result.completed:
            self._enter(RunState.CLEANUP)
            result.cleanup = self.retention.apply(mode, result.resources, result.artifacts)
        elif plan.needs_cleanup:
            LOGGER.warning("Skipping cleanup; keeping all slide files")

        self._enter(RunState.DONE)
        return result

    def run(self, mode: RetentionMode) -> RunResult:
        return self.process(mode, self.secure())


__all__ = ["PresentationPipeline", "RunResult", "RunState"]
