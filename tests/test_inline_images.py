"""
Inline image registry tests.
"""

import pytest

from mailcompose.errors import NotAnImage
from mailcompose.inline_images import InlineImageRegistry, reference_for
from mailcompose.models import CandidateFile
from mailcompose.session import IngestionSession

from conftest import MB, make_candidate, sized_candidate


def _image(name="logo.png", content=b"\x89PNG fake"):
    return make_candidate(name=name, content=content, content_type="image/png")


class TestInlineImageRegistry:
    def test_registers_images_in_order(self):
        session = IngestionSession.with_cap(MB)
        registry = InlineImageRegistry(session)

        assert registry.ingest([_image("a.png"), _image("b.png")]) == []

        assert [img.filename for img in registry.images] == ["a.png", "b.png"]
        assert registry.images[0].data.startswith("data:image/png;base64,")

    def test_non_images_rejected_but_batch_continues(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))

        rejections = registry.ingest([make_candidate(name="doc.pdf"), _image()])

        assert [img.filename for img in registry.images] == ["logo.png"]
        assert isinstance(rejections[0].error, NotAnImage)
        assert rejections[0].title == "Invalid File Type"
        assert rejections[0].description == "doc.pdf is not an image file."

    def test_any_image_subtype_is_accepted(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))
        candidate = make_candidate(name="pic.webp", content_type="image/webp")
        assert registry.ingest([candidate]) == []

    def test_images_ignore_attachment_budget(self):
        session = IngestionSession.with_cap(MB)
        registry = InlineImageRegistry(session)

        rejections = registry.ingest([sized_candidate("big.png", 2 * MB, "image/png")])

        assert rejections == []
        assert session.budget.total == 0

    def test_encode_failure_reported(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))
        broken = CandidateFile(name="lost.png", content_type="image/png", size=12)

        rejections = registry.ingest([broken])

        assert rejections[0].title == "File Upload Error"
        assert registry.images == []

    def test_rename_changes_reference(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))
        registry.ingest([_image("IMG_0042.png")])

        registry.rename(0, "header.png")

        image = registry.images[0]
        assert image.filename == "header.png"
        assert image.original_name == "IMG_0042.png"
        assert registry.reference_for(image.filename) == "cid:img@header.png"

    def test_rename_rejects_blank_filename(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))
        registry.ingest([_image("logo.png")])

        with pytest.raises(ValueError):
            registry.rename(0, "")

        assert registry.images[0].filename == "logo.png"

    def test_rename_strips_whitespace(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))
        registry.ingest([_image("logo.png")])
        registry.rename(0, "  footer.png ")
        assert registry.reference_for(registry.images[0].filename) == "cid:img@footer.png"

    def test_remove(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))
        registry.ingest([_image("a.png"), _image("b.png")])
        assert registry.remove(0).filename == "a.png"
        assert [img.filename for img in registry.images] == ["b.png"]

    def test_find_is_case_insensitive_first_match(self):
        registry = InlineImageRegistry(IngestionSession.with_cap(MB))
        registry.ingest([_image("logo.png"), _image("Header-Main.png"), _image("header-alt.png")])
        assert registry.find("header").filename == "Header-Main.png"
        assert registry.find("footer") is None


def test_reference_for():
    assert reference_for("footer.png") == "cid:img@footer.png"
