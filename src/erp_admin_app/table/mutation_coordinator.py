from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping

from erp_admin_sdk.clients.collection_client import CollectionClient
from erp_admin_sdk.exceptions import ApiError, DuplicateSubmissionError, ValidationError
from erp_admin_sdk.validation import payload_body

from ..shared.log import get_logger, log_action
from ..shared.telemetry import TelemetryLogger, build_event
from ..shared.telemetry.logger import disabled_telemetry
from .columns import CollectionSpec
from .fetch_orchestrator import FetchOrchestrator
from .query_state import QueryState
from .result_cache import FetchStatus

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeleteIntent:
    """A delete request; the confirmation dialog must call ``confirm()``."""

    entity_id: int | str
    label: str | None = None
    confirmed: bool = False

    def confirm(self) -> "DeleteIntent":
        return replace(self, confirmed=True)


@dataclass(frozen=True)
class MutationResult:
    entity: dict[str, Any] | None
    refresh_status: FetchStatus


class MutationCoordinator:
    def __init__(
        self,
        collection: CollectionSpec,
        client: CollectionClient,
        orchestrator: FetchOrchestrator,
        current_query: Callable[[], QueryState],
        *,
        telemetry: TelemetryLogger | None = None,
        on_refreshed: Callable[[FetchStatus], None] | None = None,
    ) -> None:
        self.collection = collection
        self.client = client
        self.orchestrator = orchestrator
        self.current_query = current_query
        self.telemetry = telemetry or disabled_telemetry()
        self.on_refreshed = on_refreshed
        self._in_flight: set[str] = set()

    def in_flight(self, operation: str) -> bool:
        return operation in self._in_flight

    async def create(self, payload: Mapping[str, Any]) -> MutationResult:
        self._require("create")
        body = self._validated(payload)
        return await self._run("create", lambda: self.client.create(body))

    async def update(self, entity_id: int | str, payload: Mapping[str, Any]) -> MutationResult:
        self._require("update")
        body = self._validated(payload)
        return await self._run(f"update:{entity_id}", lambda: self.client.update(entity_id, body))

    async def delete(self, intent: DeleteIntent) -> MutationResult:
        self._require("delete")
        if not intent.confirmed:
            raise ValidationError.single("confirmed", "Delete must be confirmed before it is sent")
        return await self._run(f"delete:{intent.entity_id}", lambda: self.client.delete(intent.entity_id))

    async def action(self, entity_id: int | str, name: str, body: Mapping[str, Any] | None = None) -> MutationResult:
        if not name or not name.strip("/ "):
            raise ValidationError.single("action", "Action name is required")
        self._require(name.strip("/ "))
        return await self._run(f"{name}:{entity_id}", lambda: self.client.action(entity_id, name, body))

    def _require(self, mutation: str) -> None:
        if not self.collection.supports(mutation):
            raise ValidationError.single("operation", f"{self.collection.name} does not support {mutation!r}")

    def _validated(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        if self.collection.payload_model is None:
            if not isinstance(payload, Mapping):
                raise ValidationError.single("payload", "Payload must be an object")
            return dict(payload)
        return payload_body(payload, self.collection.payload_model)

    async def _run(self, operation: str, call: Callable[[], Any]) -> MutationResult:
        if operation in self._in_flight:
            raise DuplicateSubmissionError.single(operation, "A submission for this operation is already in progress")
        self._in_flight.add(operation)
        started = time.monotonic()
        try:
            try:
                entity = await asyncio.to_thread(call)
            except ApiError as exc:
                self._record(operation, started, success=False, error_code=exc.code, trace_id=exc.trace_id)
                raise
            self._record(operation, started, success=True)
            status = await self.orchestrator.refresh(self.current_query())
            if self.on_refreshed is not None:
                self.on_refreshed(status)
        finally:
            self._in_flight.discard(operation)
        return MutationResult(entity=entity or None, refresh_status=status)

    def _record(
        self,
        operation: str,
        started: float,
        *,
        success: bool,
        error_code: str | None = None,
        trace_id: str | None = None,
    ) -> None:
        action = operation.split(":", 1)[0]
        log_action(
            logger,
            module=self.collection.name,
            action=action,
            trace_id=trace_id,
            outcome="success" if success else "error",
            level=logging.INFO if success else logging.WARNING,
            operation=operation,
            error_code=error_code,
        )
        self.telemetry.emit(
            build_event(
                category="api_call_result",
                name="mutation_result",
                module=self.collection.name,
                action=f"{self.collection.name}.{action}",
                trace_id=trace_id,
                duration_ms=int((time.monotonic() - started) * 1000),
                success=success,
                error_code=error_code,
            )
        )
