from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from erp_admin_sdk.ui_errors import UserFacingError


@dataclass
class NotificationCenter:
    messages: list[dict[str, Any]] = field(default_factory=list)

    def push(self, *, level: str, title: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        payload = {
            "level": level,
            "title": title,
            "message": message,
            "details": details or {},
        }
        self.messages.append(payload)
        return payload

    def push_error(self, title: str, error: UserFacingError) -> dict[str, Any]:
        details: dict[str, Any] = {"trace_id": error.trace_id, "technical": error.details}
        if error.field_errors:
            details["fields"] = dict(error.field_errors)
        return self.push(level="error", title=title, message=error.message, details=details)

    def clear(self) -> None:
        self.messages.clear()

    def render(self) -> dict[str, Any]:
        return {"count": len(self.messages), "messages": list(self.messages)}
