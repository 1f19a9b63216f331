from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPanel:
    """Retry affordance. Reads may be retried by the user; mutations never are."""

    operation: str
    is_mutation: bool
    has_error: bool

    def can_retry(self) -> bool:
        if self.is_mutation:
            return False
        return self.has_error

    def render(self) -> dict[str, object]:
        warning = None
        if self.is_mutation:
            warning = "Retry disabled for mutations; submit the form again."
        return {"operation": self.operation, "enabled": self.can_retry(), "warning": warning}
