"""Inline images addressed from HTML bodies by content identifier."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .encoder import encode_file
from .errors import IngestionError, NotAnImage
from .models import CandidateFile, InlineImage, Rejection
from .session import IngestionSession

logger = logging.getLogger(__name__)

CID_PREFIX = "cid:img@"


def reference_for(filename: str) -> str:
    return f"{CID_PREFIX}{filename}"


def find_image(images: Iterable[InlineImage], keyword: str) -> Optional[InlineImage]:
    """First image whose current filename contains `keyword`, case-insensitive."""
    needle = keyword.lower()
    return next((img for img in images if needle in img.filename.lower()), None)


class InlineImageRegistry:
    """Images keyed by an editable filename.

    Unlike attachments, images are not checked against the size budget.
    """

    def __init__(self, session: IngestionSession) -> None:
        self.session = session

    @property
    def images(self) -> list[InlineImage]:
        return self.session.images

    def ingest(self, candidates: Iterable[CandidateFile]) -> list[Rejection]:
        rejections: list[Rejection] = []
        for candidate in candidates:
            try:
                if not (candidate.content_type or "").lower().startswith("image/"):
                    raise NotAnImage(candidate.name, candidate.content_type)
                image = InlineImage(
                    filename=candidate.name,
                    data=encode_file(candidate),
                    original_name=candidate.name,
                )
            except IngestionError as exc:
                logger.warning("Rejected inline image %s: %s", candidate.name, exc.description)
                rejections.append(Rejection.from_error(exc))
                continue
            self.session.images.append(image)
            logger.info("Registered inline image %s", reference_for(image.filename))
        return rejections

    def remove(self, index: int) -> InlineImage:
        removed = self.session.images.pop(index)
        logger.info("Removed inline image %s", removed.filename)
        return removed

    def rename(self, index: int, new_filename: str) -> InlineImage:
        if not new_filename or not new_filename.strip():
            raise ValueError("Image filename must not be blank")
        new_filename = new_filename.strip()
        image = self.session.images[index]
        logger.debug("Renaming inline image %s -> %s", image.filename, new_filename)
        image.filename = new_filename
        return image

    def find(self, keyword: str) -> Optional[InlineImage]:
        return find_image(self.session.images, keyword)

    @staticmethod
    def reference_for(filename: str) -> str:
        return reference_for(filename)
