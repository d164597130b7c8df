from __future__ import annotations

import argparse
import os
import sqlite3
from typing import Iterable, List, Sequence

from storefront.application.services.catalog_service import CatalogService, Page
from storefront.domain.entities.product import Product
from storefront.domain.specifications.products import ProductSpecParams
from storefront.domain.value_objects.enums import ProductSort
from storefront.logging_config import get_logger
from storefront.repositories.sqlite.products_sqlite import ProductsRepoSqlite


def _format_rows(rows: Iterable[Product]) -> str:
    out_lines: List[str] = []
    for p in rows:
        out_lines.append(f"{p.price:>10} {p.name} ({p.brand} / {p.type}) [id={p.id}]")
    return "\n".join(out_lines)


def _format_footer(page: Page[Product]) -> str:
    pages = max(1, -(-page.count // page.page_size))
    return f"page {page.page_index}/{pages}, {page.count} matching product(s)"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Browse the storefront product catalog")
    p.add_argument("--db", default=None, help="Path to the SQLite catalog database")
    facets = p.add_mutually_exclusive_group()
    facets.add_argument("--brands", action="store_true", help="List distinct brands and exit")
    facets.add_argument("--types", action="store_true", help="List distinct types and exit")
    p.add_argument(
        "--brand",
        action="append",
        default=[],
        metavar="NAME",
        help="Filter by brand (repeatable or comma-separated, case-insensitive)",
    )
    p.add_argument(
        "--type",
        action="append",
        default=[],
        metavar="NAME",
        help="Filter by type (repeatable or comma-separated, case-insensitive)",
    )
    p.add_argument(
        "--sort",
        default=None,
        choices=[s.value for s in ProductSort],
        help="Sort order (default: name)",
    )
    p.add_argument("--page", type=int, default=1, metavar="N", help="1-based page index")
    p.add_argument("--page-size", type=int, default=None, metavar="N", help="Products per page")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger()

    from storefront.config.settings import settings

    db_path = os.path.abspath(args.db or settings.db_path)
    if not os.path.exists(db_path):
        parser.error(f"database not found: {db_path}")

    conn = sqlite3.connect(db_path)
    try:
        svc = CatalogService(ProductsRepoSqlite(conn), max_page_size=settings.max_page_size)

        if args.brands or args.types:
            values = svc.list_brands() if args.brands else svc.list_types()
            print("\n".join(values) if values else "No values found.")
            return 0

        try:
            params = ProductSpecParams(
                brands=args.brand,
                types=args.type,
                sort=args.sort,
                page_index=args.page,
                page_size=(
                    args.page_size if args.page_size is not None else settings.default_page_size
                ),
            )
        except ValueError as exc:
            parser.error(str(exc))

        page = svc.list_products(params)
        if not page.data:
            print("No products found.")
        else:
            print(_format_rows(page.data))
        print(_format_footer(page))
    finally:
        conn.close()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
