from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..error_mapper import envelope_failure
from ..exceptions import MalformedResponseError
from ..http_client import HttpClient
from ..models import ApiEnvelope


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None
    module: str = "erp"

    def _auth_headers(self) -> dict[str, str]:
        if self.access_token:
            return {"Authorization": f"Bearer {self.access_token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs: Any):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        kwargs.setdefault("module", self.module)
        return self.http.request(method, path, headers=merged, **kwargs)

    def _envelope_data(self, method: str, path: str, *, allow_empty: bool = False, **kwargs: Any) -> Any:
        """Send a request and unwrap ``data`` from the response envelope."""
        payload = self._request(method, path, **kwargs)
        trace_id = self.http.trace.trace_id if self.http.trace else None
        if payload is None and allow_empty:
            return None
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Expected a JSON object from {method} {path}",
                trace_id=trace_id,
                status_code=200,
                raw_payload=payload,
            )
        try:
            envelope = ApiEnvelope.model_validate(payload)
        except PydanticValidationError as exc:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Response from {method} {path} is not a valid envelope",
                details=exc.errors(include_url=False),
                trace_id=trace_id,
                status_code=200,
                raw_payload=payload,
            ) from exc
        if not envelope.success:
            raise envelope_failure(payload, 200, trace_id)
        return envelope.data
