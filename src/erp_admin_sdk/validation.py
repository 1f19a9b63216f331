from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError, ValidationIssue

T = TypeVar("T", bound=BaseModel)


def coerce_payload(payload: T | Mapping[str, Any], model_type: type[T]) -> T:
    """Validate a form payload against its request model, collecting every field issue."""
    if isinstance(payload, model_type):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError.single("payload", "payload must be a mapping")
    try:
        return model_type.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise ValidationError(_issues(exc)) from exc


def payload_body(payload: T | Mapping[str, Any], model_type: type[T]) -> dict[str, Any]:
    model = coerce_payload(payload, model_type)
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


def _issues(exc: PydanticValidationError) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for error in exc.errors():
        loc = [part for part in error.get("loc", ()) if part != "__root__"]
        row_index = next((part for part in loc if isinstance(part, int)), None)
        field = ".".join(str(part) for part in loc if not isinstance(part, int)) or "payload"
        reason = str(error.get("msg", "Invalid value"))
        issues.append(ValidationIssue(field=field, reason=reason, row_index=row_index))
    return issues or [ValidationIssue(field="payload", reason="Invalid payload")]
