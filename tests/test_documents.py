"""Tests for document creation and annotation."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from docstamp.config import AppConfig
from docstamp.errors import UnmappedSegmentError
from docstamp.markdown.documents import (
    AliasOptions,
    add_front_matter,
    build_permalink,
    create_document,
)
from docstamp.markdown.front_matter import read_metadata
from docstamp.permalink.codec import decode


MOMENT = datetime(2025, 9, 2, 17, 30, 45, 123000)
ENTROPY = "1234567890abcdef1234567890abcdef"


@pytest.fixture
def sdoc(tmp_path: Path) -> Path:
    root = tmp_path / "sdoc"
    (root / "01-测试").mkdir(parents=True)
    (root / "path-map.js").write_text(
        'export default {\n  "01-测试": "01-test", // 01-测试\n};\n', encoding="utf-8"
    )
    return root


class TestBuildPermalink:
    """Test build_permalink function."""

    def test_configured_prefix(self, tmp_path: Path) -> None:
        data = build_permalink(tmp_path, AppConfig(), moment=MOMENT, entropy=ENTROPY)

        assert data.permalink == "/docs/126b07d4957507b123456789"

    def test_empty_prefix(self, tmp_path: Path) -> None:
        config = AppConfig(permalink_prefix="")

        data = build_permalink(tmp_path, config, moment=MOMENT, entropy=ENTROPY)

        assert data.permalink == "/126b07d4957507b123456789"

    def test_alias_prefix(self, sdoc: Path) -> None:
        data = build_permalink(
            sdoc / "01-测试",
            AppConfig(),
            AliasOptions(enabled=True),
            moment=MOMENT,
            entropy=ENTROPY,
        )

        assert data.permalink == "/sdoc/01-test/126b07d4957507b123456789"

    def test_disabled_aliases_ignore_map(self, sdoc: Path) -> None:
        data = build_permalink(sdoc / "missing", AppConfig(), AliasOptions(enabled=False))

        assert data.prefix == "docs"


class TestCreateDocument:
    """Test create_document function."""

    def test_creates_post(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"

        document = create_document(
            "LV001", output_dir, AppConfig(), moment=MOMENT, entropy=ENTROPY
        )

        assert document.path == output_dir / "LV001.md"
        assert document.template == "post"
        metadata = read_metadata(document.path)
        assert metadata.title == "LV001"
        assert metadata.permalink == "/docs/126b07d4957507b123456789"
        assert decode(metadata.permalink).moment == MOMENT

    def test_index_uses_directory_name(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "guide"

        document = create_document("index", output_dir, AppConfig(), moment=MOMENT)

        assert document.template == "index"
        assert read_metadata(document.path).title == "guide"

    def test_refuses_overwrite(self, tmp_path: Path) -> None:
        (tmp_path / "LV001.md").write_text("keep", encoding="utf-8")

        with pytest.raises(FileExistsError):
            create_document("LV001", tmp_path, AppConfig())

        assert (tmp_path / "LV001.md").read_text(encoding="utf-8") == "keep"

    def test_overwrite(self, tmp_path: Path) -> None:
        (tmp_path / "LV001.md").write_text("old", encoding="utf-8")

        create_document("LV001", tmp_path, AppConfig(), overwrite=True)

        assert (tmp_path / "LV001.md").read_text(encoding="utf-8").startswith("---")

    def test_alias_permalink(self, sdoc: Path) -> None:
        document = create_document(
            "LV001", sdoc / "01-测试", AppConfig(), aliases=AliasOptions(enabled=True)
        )

        assert read_metadata(document.path).permalink.startswith("/sdoc/01-test/")

    def test_resolution_failure_writes_nothing(self, sdoc: Path) -> None:
        target = sdoc / "02-未映射"

        with pytest.raises(UnmappedSegmentError):
            create_document("LV001", target, AppConfig(), aliases=AliasOptions(enabled=True))

        assert not target.exists()


class TestAddFrontMatter:
    """Test add_front_matter function."""

    def test_adds_block(self, tmp_path: Path) -> None:
        doc = tmp_path / "LV100-add.md"
        doc.write_text("# LV100-add\n\nBody", encoding="utf-8")

        document = add_front_matter(doc, AppConfig(), moment=MOMENT, entropy=ENTROPY)

        assert document is not None
        text = doc.read_text(encoding="utf-8")
        assert text.startswith('---\ntitle: "LV100-add"\n')
        assert "<!-- more -->" not in text
        assert text.endswith("# LV100-add\n\nBody\n")
        assert read_metadata(doc).permalink == "/docs/126b07d4957507b123456789"

    def test_skips_annotated(self, tmp_path: Path) -> None:
        doc = tmp_path / "done.md"
        doc.write_text("---\ntitle: done\n---\n", encoding="utf-8")

        assert add_front_matter(doc, AppConfig()) is None
        assert doc.read_text(encoding="utf-8") == "---\ntitle: done\n---\n"

    def test_index_file(self, sdoc: Path) -> None:
        doc = sdoc / "01-测试" / "index.md"
        doc.write_text("catalog", encoding="utf-8")

        document = add_front_matter(doc, AppConfig(), aliases=AliasOptions(enabled=True))

        assert document is not None
        assert document.template == "index"
        metadata = read_metadata(doc)
        assert metadata.title == "01-测试"
        assert metadata.permalink.startswith("/sdoc/01-test/")
