from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ApiEnvelope(BaseModel):
    """``{success, message, data, timestamp}`` wrapper used by every endpoint."""

    model_config = ConfigDict(extra="allow")

    success: bool
    message: str | None = None
    data: Any = None
    timestamp: str | None = None


class PageData(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    content: list[dict[str, Any]]
    page: int = Field(ge=0)
    size: int = Field(gt=0)
    total_elements: int = Field(alias="totalElements", ge=0)
    total_pages: int = Field(alias="totalPages", ge=0)
    first: bool
    last: bool

    @model_validator(mode="after")
    def _content_fits_page(self) -> "PageData":
        if len(self.content) > self.size:
            raise ValueError(f"page holds {len(self.content)} items but size is {self.size}")
        return self


class PageQuery(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    page: int = Field(ge=0)
    size: int = Field(gt=0)
    sort_by: str | None = Field(default=None, alias="sortBy", min_length=1)
    sort_dir: str | None = Field(default=None, alias="sortDir", pattern="^(asc|desc)$")

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
