"""Attachment ingestion: MIME allow-list, size budget, encoding."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .encoder import encode_file
from .errors import IngestionError, QuotaExceeded, UnsupportedType
from .models import CandidateFile, EncodedFile, Rejection
from .session import IngestionSession

logger = logging.getLogger(__name__)

ACCEPTED_FILE_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
)


class AttachmentIngestor:
    """Accumulate encoded attachments into a session, one file at a time."""

    def __init__(
        self,
        session: IngestionSession,
        accepted_types: Sequence[str] | None = None,
    ) -> None:
        self.session = session
        self.accepted_types = frozenset(
            mime.lower() for mime in (accepted_types or ACCEPTED_FILE_TYPES)
        )

    @property
    def files(self) -> list[EncodedFile]:
        return self.session.attachments

    @property
    def total_size(self) -> int:
        return self.session.budget.total

    def ingest(self, candidates: Iterable[CandidateFile]) -> list[Rejection]:
        """Add every acceptable candidate; return one Rejection per refused file."""
        rejections: list[Rejection] = []
        for candidate in candidates:
            try:
                encoded = self._ingest_one(candidate)
            except IngestionError as exc:
                logger.warning("Rejected attachment %s: %s", candidate.name, exc.description)
                rejections.append(Rejection.from_error(exc))
                continue
            logger.info(
                "Attached %s (%s bytes, total %s/%s)",
                encoded.name,
                encoded.size,
                self.session.budget.total,
                self.session.budget.cap,
            )
        return rejections

    def _ingest_one(self, candidate: CandidateFile) -> EncodedFile:
        if (candidate.content_type or "").lower() not in self.accepted_types:
            raise UnsupportedType(candidate.name, candidate.content_type)

        budget = self.session.budget
        decision = budget.admit(candidate.size)
        if not decision.allowed:
            raise QuotaExceeded(candidate.name, remaining=decision.remaining, cap=budget.cap)

        data = encode_file(candidate)
        encoded = EncodedFile(
            name=candidate.name,
            size=candidate.size,
            mime_type=candidate.content_type,
            data=data,
            original_name=candidate.name,
        )
        self.session.attachments.append(encoded)
        budget.commit(encoded.size)
        return encoded

    def remove(self, index: int) -> EncodedFile:
        removed = self.session.attachments.pop(index)
        self.session.budget.release(removed.size)
        logger.info("Removed attachment %s (%s bytes)", removed.name, removed.size)
        return removed

    def rename(self, index: int, new_name: str) -> EncodedFile:
        if not new_name or not new_name.strip():
            raise ValueError("Attachment name must not be blank")
        new_name = new_name.strip()
        target = self.session.attachments[index]
        logger.debug("Renaming attachment %s -> %s", target.name, new_name)
        target.name = new_name
        return target
