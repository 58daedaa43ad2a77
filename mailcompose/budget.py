"""Running byte total for attachments, checked against a fixed cap."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BudgetDecision:
    allowed: bool
    remaining: int


class SizeBudget:
    """Aggregate-only tracker; callers commit sizes after a successful encode."""

    def __init__(self, cap: int) -> None:
        if cap <= 0:
            raise ValueError("cap must be greater than zero")
        self.cap = cap
        self.total = 0

    @property
    def remaining(self) -> int:
        return max(self.cap - self.total, 0)

    def admit(self, size: int) -> BudgetDecision:
        if self.total + size > self.cap:
            return BudgetDecision(allowed=False, remaining=self.remaining)
        return BudgetDecision(allowed=True, remaining=self.remaining - size)

    def commit(self, size: int) -> None:
        self.total += size

    def release(self, size: int) -> None:
        self.total = max(self.total - size, 0)

    def reset(self) -> None:
        self.total = 0
