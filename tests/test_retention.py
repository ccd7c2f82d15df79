from __future__ import annotations

import os
from pathlib import Path
from typing import List, Tuple

import pytest

from presentation_downloader.exceptions import InvalidModeError
from presentation_downloader.retention import RetentionManager, RetentionMode
from presentation_downloader.types import ArtifactDescriptor, ResourceDescriptor


def _files(directory: Path, count: int, converted: Tuple[int, ...] = ()) -> Tuple[List[ResourceDescriptor], List[ArtifactDescriptor]]:
    directory.mkdir(parents=True, exist_ok=True)
    resources = []
    artifacts = []
    for index in range(1, count + 1):
        svg = directory / f"slide_{index:03d}.svg"
        svg.write_text("<svg/>")
        resources.append(ResourceDescriptor(index=index, path=str(svg)))
        if index in converted:
            png = directory / f"slide_{index:03d}.png"
            png.write_bytes(b"png")
            artifacts.append(ArtifactDescriptor(index=index, path=str(png), byte_size=3))
    return resources, artifacts


@pytest.mark.parametrize(
    ("mode", "remaining"),
    [
        (RetentionMode.KEEP_SOURCE, {"svg", "png"}),
        (RetentionMode.KEEP_ARTIFACT, {"png"}),
        (RetentionMode.KEEP_BOTH, {"svg", "png"}),
        (RetentionMode.DOCUMENT_DELETE_ALL, set()),
        (RetentionMode.DOCUMENT_KEEP_ARTIFACT, {"png"}),
        (RetentionMode.DOCUMENT_KEEP_BOTH, {"svg", "png"}),
    ],
)
def test_apply_keeps_what_the_mode_requires(tmp_path: Path, mode: RetentionMode, remaining: set) -> None:
    directory = tmp_path / "slides"
    resources, artifacts = _files(directory, 3, converted=(1, 2, 3))

    RetentionManager().apply(mode, resources, artifacts)

    suffixes = {path.suffix.lstrip(".") for path in directory.iterdir()}
    assert suffixes == remaining
    if remaining:
        assert len(list(directory.iterdir())) == 3 * len(remaining)


def test_delete_all_reports_deleted_files(tmp_path: Path) -> None:
    resources, artifacts = _files(tmp_path, 3, converted=(1, 2, 3))

    report = RetentionManager().apply(RetentionMode.DOCUMENT_DELETE_ALL, resources, artifacts)

    assert len(report.deleted) == 6
    assert report.missing == []
    assert report.failed == []
    assert list(tmp_path.iterdir()) == []


def test_missing_files_do_not_block_other_deletions(tmp_path: Path) -> None:
    resources, artifacts = _files(tmp_path, 3, converted=(1, 3))
    os.remove(resources[0].path)

    report = RetentionManager().apply(RetentionMode.DOCUMENT_DELETE_ALL, resources, artifacts)

    assert sorted(Path(path).name for path in report.missing) == ["slide_001.svg", "slide_002.png"]
    assert len(report.deleted) == 4
    assert list(tmp_path.iterdir()) == []


def test_failed_deletion_is_recorded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    resources, artifacts = _files(tmp_path, 3, converted=(1, 2, 3))
    real_remove = os.remove

    def flaky_remove(path: str) -> None:
        if path.endswith("slide_002.svg"):
            raise PermissionError("read-only file")
        real_remove(path)

    monkeypatch.setattr("presentation_downloader.retention.os.remove", flaky_remove)

    report = RetentionManager().apply(RetentionMode.KEEP_ARTIFACT, resources, artifacts)

    assert [Path(path).name for path in report.failed] == ["slide_002.svg"]
    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "slide_001.png",
        "slide_002.png",
        "slide_002.svg",
        "slide_003.png",
    ]


def test_artifact_paths_are_deduplicated(tmp_path: Path) -> None:
    resources, artifacts = _files(tmp_path, 2, converted=(1, 2))

    paths = RetentionManager.artifact_paths(resources, artifacts)

    assert [Path(path).name for path in paths] == ["slide_001.png", "slide_002.png"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1", RetentionMode.KEEP_SOURCE),
        (" 4 ", RetentionMode.DOCUMENT_DELETE_ALL),
        (6, RetentionMode.DOCUMENT_KEEP_BOTH),
        ("keep-both", RetentionMode.KEEP_BOTH),
        ("DOCUMENT_KEEP_ARTIFACT", RetentionMode.DOCUMENT_KEEP_ARTIFACT),
        (RetentionMode.KEEP_ARTIFACT, RetentionMode.KEEP_ARTIFACT),
    ],
)
def test_parse_mode(value: object, expected: RetentionMode) -> None:
    assert RetentionMode.parse(value) is expected


@pytest.mark.parametrize("value", ["0", "7", "", "abc", None, "-1"])
def test_parse_mode_rejects(value: object) -> None:
    with pytest.raises(InvalidModeError):
        RetentionMode.parse(value)


def test_mode_plans() -> None:
    assert not RetentionMode.KEEP_SOURCE.plan.convert
    assert not RetentionMode.KEEP_SOURCE.plan.needs_cleanup
    assert RetentionMode.KEEP_BOTH.plan.convert and not RetentionMode.KEEP_BOTH.plan.assemble
    assert all(mode.plan.convert for mode in RetentionMode if mode.value >= 2)
    assert [mode.plan.assemble for mode in RetentionMode] == [False, False, False, True, True, True]
    assert all(mode.label for mode in RetentionMode)
