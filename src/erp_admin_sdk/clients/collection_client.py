from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import MalformedResponseError
from ..models import PageData, PageQuery
from .base import BaseClient


@dataclass
class CollectionClient(BaseClient):
    """Generic REST collection: paged listing plus singular-resource CRUD."""

    collection_path: str = "/"

    def list_page(
        self,
        query: PageQuery | Mapping[str, Any],
        *,
        path: str | None = None,
        extra_params: Mapping[str, Any] | None = None,
    ) -> PageData:
        page_query = query if isinstance(query, PageQuery) else PageQuery.model_validate(query)
        params = page_query.to_params()
        if extra_params:
            params.update({key: value for key, value in extra_params.items() if value not in (None, "")})
        target = path or self.collection_path
        data = self._envelope_data("GET", target, params=params, operation="list")
        if not isinstance(data, dict):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Expected paged data from GET {target}",
                status_code=200,
                raw_payload=data,
            )
        try:
            return PageData.model_validate(data)
        except PydanticValidationError as exc:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Paged data from GET {target} is malformed",
                details=exc.errors(include_url=False),
                status_code=200,
                raw_payload=data,
            ) from exc

    def get(self, entity_id: int | str) -> dict[str, Any]:
        return self._entity("GET", self._item_path(entity_id), operation="get")

    def create(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return self._entity("POST", self.collection_path, json_body=dict(body), operation="create")

    def update(self, entity_id: int | str, body: Mapping[str, Any]) -> dict[str, Any]:
        return self._entity("PUT", self._item_path(entity_id), json_body=dict(body), operation="update")

    def delete(self, entity_id: int | str) -> None:
        self._envelope_data("DELETE", self._item_path(entity_id), allow_empty=True, operation="delete")

    def action(self, entity_id: int | str, action: str, body: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self._entity(
            "POST",
            f"{self._item_path(entity_id)}/{action.strip('/')}",
            json_body=dict(body) if body is not None else None,
            operation=action,
        )

    def _item_path(self, entity_id: int | str) -> str:
        return f"{self.collection_path.rstrip('/')}/{entity_id}"

    def _entity(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        data = self._envelope_data(method, path, **kwargs)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Expected an entity object from {method} {path}",
                status_code=200,
                raw_payload=data,
            )
        return data
