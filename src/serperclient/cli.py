"""Serper CLI implementation."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from .client import SerperClient
from .config import DEFAULT_RETRY_COUNT, DEFAULT_TOTAL_TIMEOUT
from .errors import ErrorKind
from .types import Endpoint, SearchRequest

# Exit code for "configuration error" (BSD sysexits.h EX_CONFIG)
EX_CONFIG = 78

console = Console()
err_console = Console(stderr=True)

# Response attribute holding the result list, per endpoint
_ITEMS_FIELD = {
    Endpoint.WEB: "results",
    Endpoint.IMAGES: "images",
    Endpoint.VIDEOS: "videos",
    Endpoint.PLACES: "places",
    Endpoint.NEWS: "news",
    Endpoint.SHOPPING: "shopping",
    Endpoint.SCHOLAR: "results",
}


def _first(item: Any, *names: str) -> str:
    for name in names:
        value = getattr(item, name, None)
        if value:
            return str(value)
    return ""


def _detail(item: Any) -> str:
    return _first(item, "snippet", "address", "price", "publication_info", "source", "domain")


def render_table(endpoint: Endpoint, response: Any) -> Table:
    """Build a rich table of the response's result list."""
    table = Table(title=f"Serper {endpoint.name.lower()} results", box=ROUNDED, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Link", style="cyan", overflow="fold")
    table.add_column("Detail")

    for index, item in enumerate(getattr(response, _ITEMS_FIELD[endpoint]), start=1):
        position = getattr(item, "position", 0) or index
        table.add_row(
            str(position),
            _first(item, "title", "name"),
            _first(item, "url", "link", "image_url", "website"),
            _detail(item),
        )
    return table


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="serper",
        description="Serper - Google Search API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    serper web "python async frameworks" --num 5
    serper news "python release" --gl us --hl en
    serper places "coffee" --location "Berlin, Germany" --json

Environment:
    SERPER_API_KEY   API key (required)
    SERPER_BASE_URL  Override the API host
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for endpoint in Endpoint:
        name = endpoint.name.lower()
        sub = subparsers.add_parser(name, help=f"Search {name} ({endpoint.path})")
        sub.add_argument("query", help="Search query")
        sub.add_argument("--gl", default="", help="Country code (e.g., us)")
        sub.add_argument("--hl", default="", help="Language code (e.g., en)")
        sub.add_argument("--location", default="", help="Free-text location")
        sub.add_argument("-n", "--num", type=int, default=0, help="Number of results")
        sub.add_argument("-p", "--page", type=int, default=0, help="Result page")
        sub.add_argument("--autocorrect", action="store_true", help="Let the API autocorrect the query")
        sub.add_argument(
            "--retries",
            type=_non_negative_int,
            default=DEFAULT_RETRY_COUNT,
            help=f"Retries on transient errors (default: {DEFAULT_RETRY_COUNT})",
        )
        sub.add_argument(
            "--timeout",
            type=_positive_float,
            default=DEFAULT_TOTAL_TIMEOUT,
            help=f"Total timeout in seconds (default: {DEFAULT_TOTAL_TIMEOUT:g})",
        )
        sub.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    return parser


async def _run(args: argparse.Namespace) -> int:
    endpoint = Endpoint[args.command.upper()]
    request = SearchRequest(
        query=args.query,
        country=args.gl,
        location=args.location,
        language=args.hl,
        autocorrect=args.autocorrect,
        num=args.num,
        page=args.page,
    )

    client = SerperClient(retry_count=args.retries, total_timeout=args.timeout)
    async with client:
        result = await client.execute(request, endpoint)

    if args.json:
        output = result.map(lambda response: json.dumps(response.to_dict(), indent=2))
    else:
        output = result.map(lambda response: render_table(endpoint, response))

    if output.is_err():
        error = output.error
        err_console.print(f"Error: {error.message}", style="red", markup=False, highlight=False, soft_wrap=True)
        return EX_CONFIG if error.root().kind is ErrorKind.CONFIGURATION else 1

    if args.json:
        print(output.value)
    else:
        console.print(output.value)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
