from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union
import sys

import pytest
import requests
from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from presentation_downloader.config import DownloaderConfig  # noqa: E402

BASE_URL = "https://slides.example.com/presentation/svg"

COLORS = [
    "#ff0000",
    "#00ff00",
    "#0000ff",
    "#ffff00",
    "#00ffff",
    "#ff00ff",
]

Served = Union[bytes, int, Exception]


def make_svg(color: str = "#ff0000", width: int = 32, height: int = 18) -> bytes:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
        f'<rect x="0" y="0" width="{width}" height="{height}" fill="{color}"/>'
        "</svg>"
    ).encode("utf-8")


class FakeResponse:
    def __init__(self, status_code: int, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Serves slides from a dict of index -> body, status code or exception.

    Indices that are not listed answer 404. The session records every
    requested URL and the highest number of requests in flight at once.
    """

    def __init__(self, served: Dict[int, Served]) -> None:
        self.served = served
        self.requested: List[str] = []
        self.timeouts: List[Optional[float]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            self.requested.append(url)
            self.timeouts.append(timeout)
            index = int(url.rsplit("/", 1)[-1])
            value = self.served.get(index, 404)
            if isinstance(value, Exception):
                raise value
            if isinstance(value, int):
                return FakeResponse(value)
            return FakeResponse(200, value)
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def config_factory(tmp_path: Path) -> Callable[..., DownloaderConfig]:
    def _create(**overrides: object) -> DownloaderConfig:
        options = {
            "base_url": BASE_URL,
            "output_dir": str(tmp_path / "slides"),
            "output_pdf": str(tmp_path / "presentation.pdf"),
            "workers": 2,
        }
        options.update(overrides)
        return DownloaderConfig(**options)  # type: ignore[arg-type]

    return _create


@pytest.fixture()
def config(config_factory: Callable[..., DownloaderConfig]) -> DownloaderConfig:
    return config_factory()


@pytest.fixture()
def slide_server() -> Callable[..., FakeSession]:
    def _create(count: int, overrides: Optional[Dict[int, Served]] = None) -> FakeSession:
        served: Dict[int, Served] = {
            index: make_svg(COLORS[(index - 1) % len(COLORS)])
            for index in range(1, count + 1)
        }
        served.update(overrides or {})
        return FakeSession(served)

    return _create


@pytest.fixture()
def png_factory(tmp_path: Path) -> Callable[[str, str], Path]:
    def _create(filename: str, color: str = "#ff0000") -> Path:
        directory = tmp_path / "pngs"
        directory.mkdir(exist_ok=True)
        path = directory / filename
        Image.new("RGB", (64, 36), color).save(path, format="PNG")
        return path

    return _create


@pytest.fixture()
def connection_error() -> Exception:
    return requests.ConnectionError("connection reset by peer")
