from __future__ import annotations

import argparse
import logging
import sys

from .errors import (
    CrateNotFoundError,
    DecompressError,
    DocsUnavailableError,
    FetchError,
    FormatMismatchError,
    ItemNotFoundError,
    ParseError,
    TransportError,
)
from .service import DocsConfig, DocsService
from .urls import DOCS_RS_BASE_URL, LATEST_VERSION

EXIT_ERROR = 2
EXIT_NOT_FOUND = 3


def describe_error(err: Exception) -> str:
    """One actionable line per failure kind."""

    if isinstance(err, CrateNotFoundError):
        return (
            f"{err.crate} v{err.version} was not found on docs.rs; "
            "check the crate name and version"
        )
    if isinstance(err, DocsUnavailableError):
        return (
            f"docs.rs has no rustdoc JSON for {err.crate} v{err.version}; "
            "the build predates JSON support, try a newer version"
        )
    if isinstance(err, FormatMismatchError):
        return (
            f"docs.rs serves rustdoc JSON format v{err.actual} for {err.crate} "
            f"but this tool reads v{err.expected}; update crate-docs"
        )
    if isinstance(err, (ParseError, DecompressError)):
        return f"docs.rs returned an unreadable payload: {err}"
    if isinstance(err, TransportError):
        if err.status is not None:
            return f"docs.rs request failed with HTTP {err.status}; try again later"
        return f"could not reach docs.rs: {err}"
    return str(err)


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _add_version_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--version",
        dest="crate_version",
        default=LATEST_VERSION,
        help="Crate version (default: latest)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crate-docs",
        description="Browse rustdoc JSON from docs.rs as plain text",
    )
    parser.add_argument("--base-url", default=DOCS_RS_BASE_URL)
    parser.add_argument("--timeout", type=float, default=45)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    docs_p = sub.add_parser(
        "docs",
        help="List a module's public items grouped by kind",
    )
    docs_p.add_argument("crate")
    _add_version_arg(docs_p)
    docs_p.add_argument(
        "--path",
        dest="module_path",
        default=None,
        help="Module path, e.g. de or io::util (default: crate root)",
    )

    item_p = sub.add_parser(
        "item",
        help="Show the declaration and docs of a single item",
    )
    item_p.add_argument("crate")
    item_p.add_argument("item_path", help="e.g. de::from_str or Serialize")
    _add_version_arg(item_p)

    search_p = sub.add_parser(
        "search",
        help="Case-insensitive substring search over item names",
    )
    search_p.add_argument("crate")
    search_p.add_argument("query")
    _add_version_arg(search_p)
    search_p.add_argument("--limit", type=_positive_int, default=None)

    return parser


def main(argv: list[str] | None = None, *, service: DocsService | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if service is None:
        config = DocsConfig(base_url=args.base_url, timeout_s=float(args.timeout))
        service = DocsService.from_config(config)

    try:
        if args.cmd == "docs":
            text = service.crate_docs(
                args.crate, args.crate_version, module_path=args.module_path
            )
        elif args.cmd == "item":
            text = service.doc_item(args.crate, args.item_path, args.crate_version)
        elif args.cmd == "search":
            text = service.search_docs(
                args.crate, args.query, args.crate_version, limit=args.limit
            )
        else:
            return EXIT_ERROR
    except ItemNotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_NOT_FOUND
    except (CrateNotFoundError, DocsUnavailableError) as e:
        print(describe_error(e), file=sys.stderr)
        return EXIT_NOT_FOUND
    except FetchError as e:
        print(describe_error(e), file=sys.stderr)
        return EXIT_ERROR

    print(text.rstrip("\n"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
