"""Tests for alias path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from docstamp.aliases.resolver import resolve
from docstamp.errors import MapFileMissingError, NoAnchorError, ResolutionError, UnmappedSegmentError


def _write_map(path: Path, entries: dict[str, str]) -> Path:
    lines = ["export default {"]
    lines += [f'  "{name}": "{alias}", // {name}' for name, alias in entries.items()]
    lines.append("};")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sdoc(tmp_path: Path) -> Path:
    root = tmp_path / "project" / "sdoc"
    root.mkdir(parents=True)
    return root


class TestResolve:
    """Test resolve function."""

    def test_single_segment(self, sdoc: Path) -> None:
        target = sdoc / "01-测试"
        target.mkdir()
        _write_map(sdoc / "path-map.js", {"01-测试": "01-test"})

        assert resolve(target) == "sdoc/01-test"

    def test_nested_segments(self, sdoc: Path) -> None:
        target = sdoc / "00.example" / "01.测试"
        target.mkdir(parents=True)
        _write_map(sdoc / "path-map.js", {"00.example": "example", "01.测试": "test"})

        assert resolve(target) == "sdoc/example/test"

    def test_anchor_itself(self, sdoc: Path) -> None:
        _write_map(sdoc / "path-map.js", {})

        assert resolve(sdoc) == "sdoc"

    def test_target_need_not_exist(self, sdoc: Path) -> None:
        _write_map(sdoc / "path-map.js", {"new": "fresh"})

        assert resolve(sdoc / "new") == "sdoc/fresh"

    def test_default_sentinel_is_used_verbatim(self, sdoc: Path) -> None:
        _write_map(sdoc / "path-map.js", {"guide": "default"})

        assert resolve(sdoc / "guide") == "sdoc/default"

    def test_unmapped_segment(self, sdoc: Path) -> None:
        """An empty map fails on the first segment."""
        _write_map(sdoc / "path-map.js", {})

        with pytest.raises(UnmappedSegmentError) as excinfo:
            resolve(sdoc / "01-测试")

        assert excinfo.value.segment == "01-测试"

    def test_all_or_nothing(self, sdoc: Path) -> None:
        """A later miss fails even when earlier segments are mapped."""
        _write_map(sdoc / "path-map.js", {"a": "x", "c": "z"})

        with pytest.raises(UnmappedSegmentError) as excinfo:
            resolve(sdoc / "a" / "b" / "c")

        assert excinfo.value.segment == "b"

    def test_no_anchor(self, tmp_path: Path) -> None:
        with pytest.raises(NoAnchorError):
            resolve(tmp_path / "docs" / "guide")

    def test_fallback_root(self, tmp_path: Path) -> None:
        """A map written under ``src`` resolves paths below it."""
        src = tmp_path / "project" / "src"
        (src / "00.example").mkdir(parents=True)
        _write_map(src / "path-map.js", {"00.example": "example"})

        assert resolve(src / "00.example") == "src/example"

    def test_anchor_preferred_over_fallback(self, sdoc: Path) -> None:
        target = sdoc / "src"
        _write_map(sdoc / "path-map.js", {"src": "code"})

        assert resolve(target) == "sdoc/code"

    def test_fallback_disabled(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        src.mkdir()
        _write_map(src / "path-map.js", {})

        with pytest.raises(NoAnchorError):
            resolve(src, fallback_name=None)

    def test_missing_map_file(self, sdoc: Path) -> None:
        with pytest.raises(MapFileMissingError) as excinfo:
            resolve(sdoc / "guide")

        assert excinfo.value.path == sdoc.resolve() / "path-map.js"

    def test_explicit_map_file(self, sdoc: Path, tmp_path: Path) -> None:
        map_file = _write_map(tmp_path / "aliases.js", {"guide": "g"})

        assert resolve(sdoc / "guide", map_file) == "sdoc/g"

    def test_explicit_map_file_missing(self, sdoc: Path, tmp_path: Path) -> None:
        _write_map(sdoc / "path-map.js", {"guide": "g"})

        with pytest.raises(MapFileMissingError):
            resolve(sdoc / "guide", tmp_path / "nope.js")

    def test_relative_output_dir(
        self, sdoc: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_map(sdoc / "path-map.js", {"guide": "g"})
        monkeypatch.chdir(sdoc.parent)

        assert resolve(Path("sdoc/guide")) == "sdoc/g"

    def test_errors_share_base(self, tmp_path: Path) -> None:
        with pytest.raises(ResolutionError):
            resolve(tmp_path)
