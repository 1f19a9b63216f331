from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class AppConfigError(ValueError):
    """Raised when admin app configuration is missing or invalid."""


@dataclass(frozen=True)
class AppConfig:
    default_page_size: int = 10
    page_size_options: tuple[int, ...] = (10, 20, 30, 40, 50)
    client_filter_enabled: bool = True
    telemetry_enabled: bool = False
    telemetry_log_file: str | None = None


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_page_sizes(raw: str) -> tuple[int, ...]:
    try:
        sizes = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError as exc:
        raise AppConfigError(f"Invalid ERP_PAGE_SIZE_OPTIONS: expected comma separated integers, got {raw!r}") from exc
    if not sizes:
        raise AppConfigError("Invalid ERP_PAGE_SIZE_OPTIONS: at least one page size is required")
    if any(size <= 0 for size in sizes):
        raise AppConfigError(f"Invalid ERP_PAGE_SIZE_OPTIONS: page sizes must be > 0, got {raw!r}")
    return tuple(sorted(set(sizes)))


def load_app_config(env_file: str | None = None) -> AppConfig:
    load_dotenv(env_file)

    raw_default = os.getenv("ERP_DEFAULT_PAGE_SIZE", "10")
    try:
        default_page_size = int(raw_default)
    except ValueError as exc:
        raise AppConfigError(f"Invalid ERP_DEFAULT_PAGE_SIZE: expected an integer, got {raw_default!r}") from exc
    if default_page_size <= 0:
        raise AppConfigError(f"Invalid ERP_DEFAULT_PAGE_SIZE: expected > 0, got {default_page_size}")

    page_size_options = _parse_page_sizes(os.getenv("ERP_PAGE_SIZE_OPTIONS", "10,20,30,40,50"))
    if default_page_size not in page_size_options:
        raise AppConfigError(
            f"ERP_DEFAULT_PAGE_SIZE={default_page_size} is not one of ERP_PAGE_SIZE_OPTIONS {list(page_size_options)}"
        )

    return AppConfig(
        default_page_size=default_page_size,
        page_size_options=page_size_options,
        client_filter_enabled=_coerce_bool(os.getenv("ERP_CLIENT_FILTER_ENABLED"), True),
        telemetry_enabled=_coerce_bool(os.getenv("ERP_TELEMETRY_ENABLED"), False),
        telemetry_log_file=os.getenv("ERP_TELEMETRY_LOG_FILE") or None,
    )
