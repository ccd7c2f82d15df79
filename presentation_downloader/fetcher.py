"""Sequential slide download.

Slides are requested one at a time, starting at index 1, until the first
index that does not answer with content. Every slide is written to disk
before the next request is issued so the complete set is secured before
any later phase touches it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, List, Optional

import requests

from .config import DownloaderConfig
from .exceptions import StorageError, ZeroResourcesError
from .types import ResourceDescriptor

LOGGER = logging.getLogger("presentation_downloader.fetcher")


class SlideFetcher:
    """Walk ``{base_url}1``, ``{base_url}2``, ... until a slide is absent.

    A 404, any other non-200 status, an empty body and a transport error
    all end the walk. Transient failures are indistinguishable from the end
    of the presentation and nothing is retried.
    """

    def __init__(
        self,
        config: DownloaderConfig,
        *,
        session: Optional[requests.Session] = None,
        progress_callback: Optional[Callable[[ResourceDescriptor], None]] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.progress_callback = progress_callback

    def fetch(self, index: int) -> Optional[bytes]:
        """Return the body of slide *index*, or ``None`` when it is absent."""

        url = self.config.url_for(index)
        LOGGER.debug("Fetching slide %d from %s", index, url)
        try:
            response = self.session.get(url, timeout=self.config.request_timeout)
        except requests.RequestException as exc:
            LOGGER.error("Error fetching slide %d: %s", index, exc)
            return None

        if response.status_code == 404:
            LOGGER.debug("Slide %d not found", index)
            return None
        if response.status_code != 200:
            LOGGER.warning("Slide %d returned HTTP %d", index, response.status_code)
            return None
        if not response.content:
            LOGGER.warning("Slide %d returned an empty body", index)
            return None
        return response.content

    def _persist(self, index: int, content: bytes) -> ResourceDescriptor:
        path = Path(self.config.resource_path(index))
        try:
            path.write_bytes(content)
        except OSError as exc:
            LOGGER.error("Error saving slide %d to %s: %s", index, path, exc)
            raise StorageError(f"Failed to save slide {index} to {path}: {exc}") from exc
        LOGGER.debug("Slide %d saved to %s", index, path)
        return ResourceDescriptor(index=index, path=str(path))

    def iter_resources(self) -> Iterator[ResourceDescriptor]:
        """Yield each slide after it has been written to disk.

        The generator stops at the first absent index; the next request is
        only issued once the consumer asks for the next descriptor.
        """

        try:
            self.config.output_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Cannot create output directory {self.config.output_path}: {exc}"
            ) from exc

        index = 1
        while True:
            content = self.fetch(index)
            if content is None:
                LOGGER.info(
                    "Reached end at slide %d. Total slides downloaded: %d",
                    index,
                    index - 1,
                )
                return

            resource = self._persist(index, content)
            if self.progress_callback:
                self.progress_callback(resource)
            yield resource
            index += 1

    def fetch_all(self) -> List[ResourceDescriptor]:
        """Download every slide and return them in index order."""

        resources = list(self.iter_resources())
        if not resources:
            raise ZeroResourcesError(
                f"No slides were downloaded from {self.config.base_url}"
            )
        return resources

    def close(self) -> None:
        self.session.close()


__all__ = ["SlideFetcher"]
