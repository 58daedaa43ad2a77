"""State owned by one compose flow."""

from __future__ import annotations

from dataclasses import dataclass, field

from .budget import SizeBudget
from .config import DEFAULT_MAX_TOTAL_ATTACHMENT_SIZE
from .models import EncodedFile, InlineImage


@dataclass
class IngestionSession:
    """Attachments, inline images and the attachment budget.

    Inline images are deliberately not counted against the budget.
    """

    budget: SizeBudget = field(
        default_factory=lambda: SizeBudget(DEFAULT_MAX_TOTAL_ATTACHMENT_SIZE)
    )
    attachments: list[EncodedFile] = field(default_factory=list)
    images: list[InlineImage] = field(default_factory=list)

    @classmethod
    def with_cap(cls, cap: int) -> "IngestionSession":
        return cls(budget=SizeBudget(cap))

    def clear(self) -> None:
        self.attachments.clear()
        self.images.clear()
        self.budget.reset()
