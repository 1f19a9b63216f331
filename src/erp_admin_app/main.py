from __future__ import annotations

import argparse
import asyncio
import logging

from erp_admin_sdk import ConfigError, ValidationError

from .bootstrap import AdminConsoleBootstrap
from .config import AppConfigError
from .table_printer import print_table

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="erp-admin", description="Browse ERP collections from the terminal.")
    parser.add_argument("collection", choices=("products", "sales"))
    parser.add_argument("--page", type=int, default=1, help="1-based page number")
    parser.add_argument("--size", type=int, default=None)
    parser.add_argument("--sort", default=None, help="sortable column id")
    parser.add_argument("--desc", action="store_true")
    parser.add_argument("--filter", default="", help="substring filter")
    parser.add_argument("--token", default=None, help="bearer token")
    parser.add_argument("--env-file", default=None)
    return parser


async def browse(bootstrap: AdminConsoleBootstrap, args: argparse.Namespace) -> int:
    view = bootstrap.products_view() if args.collection == "products" else bootstrap.sales_history_view()
    controller = view.controller
    try:
        await view.load()
        if args.size is not None:
            await controller.set_page_size(args.size)
        if args.sort:
            await controller.set_sort(args.sort)
            wanted = "desc" if args.desc else "asc"
            if controller.query_state.sort_direction.value != wanted:
                await controller.set_sort(args.sort)
        if args.filter:
            await controller.set_filter_text(args.filter)
        if args.page > 1:
            await controller.set_page_index(args.page - 1)
    except ValidationError as exc:
        print(f"Invalid option: {exc}")
        return 2
    finally:
        controller.close()
    status = controller.fetch_status
    if status.is_error:
        print(f"Error: {status.message} (trace_id={status.trace_id})")
    print_table(args.collection.title(), view.render()["table"])
    return 1 if status.is_error else 0


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        bootstrap = AdminConsoleBootstrap(env_file=args.env_file, token=args.token)
    except (ConfigError, AppConfigError) as exc:
        print(f"Configuration error: {exc}")
        return 2
    try:
        return asyncio.run(browse(bootstrap, args))
    finally:
        bootstrap.close()


if __name__ == "__main__":
    raise SystemExit(run())
