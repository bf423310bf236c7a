import argparse
import logging
import sys
from pathlib import Path
from typing import List

if __package__ in {None, ""}:
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
    __package__ = "syscodes"

from .catalogue import SysCodeCatalogue
from .config import load_settings
from .errors import CatalogueLoadError
from .models import parse_syscode_id
from .logging_setup import configure_logging
from .presenter import limited_listing, plural


def positive_int_arg(text: str) -> int:
    """Argparse type for counts that must be at least 1."""

    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def syscode_id_arg(text: str) -> int:
    """Argparse type for SysCode ids."""

    try:
        return parse_syscode_id(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid syscode id: {text!r}")


def show(args: argparse.Namespace, catalogue: SysCodeCatalogue) -> None:
    """Print the full description of one SysCode."""

    syscode = catalogue.get_syscode(args.id)
    if syscode is None:
        raise SystemExit(f"Syscode {args.id:x} not found")
    print(catalogue.render(syscode), end="")


def search(args: argparse.Namespace, catalogue: SysCodeCatalogue) -> None:
    """Search by exact code or name substring."""

    results = catalogue.find_syscodes(args.text)
    if not results:
        print(f"No syscodes found for `{args.text}`")
        return
    if len(results) == 1:
        print(catalogue.render(results[0]), end="")
        return

    print(f"{len(results)} {plural(len(results), 'syscode', 'syscodes')} found")
    lines = limited_listing(
        results,
        lambda syscode: f"\t{catalogue.reference_line(syscode.id)}",
        lambda skipped: f"\t... _(skipping {skipped} {plural(skipped, 'syscode', 'syscodes')})_",
        args.limit,
    )
    for line in lines:
        print(line)


def translations(args: argparse.Namespace, catalogue: SysCodeCatalogue) -> None:
    """Print all english/german translation pairs, tab separated."""

    for english, german in sorted(catalogue.translations):
        print(f"{english}\t{german}")


def stats(args: argparse.Namespace, catalogue: SysCodeCatalogue) -> None:
    """Show statistics about the loaded catalogue."""

    print(f"Syscodes: {len(catalogue)}")
    print(f"Names: {catalogue.name_count}")
    print(f"Translations: {len(catalogue.translations)}")


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="SysCode catalogue utility")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("show", help="show a syscode by id")
    p.add_argument("id", type=syscode_id_arg)
    p.set_defaults(func=show)

    p = sub.add_parser("search", help="search syscodes by code or name")
    p.add_argument("text")
    p.add_argument(
        "--limit",
        type=positive_int_arg,
        default=20,
        help="maximum number of results to list",
    )
    p.set_defaults(func=search)

    p = sub.add_parser("translations", help="list english/german translation pairs")
    p.set_defaults(func=translations)

    p = sub.add_parser("stats", help="show statistics")
    p.set_defaults(func=stats)

    parser.add_argument("--config", type=Path, default=None, help="path to config.ini")
    parser.add_argument("--code-file", type=Path, default=None, help="syscode table (overrides config)")
    parser.add_argument("--subset-file", type=Path, default=None, help="subset table (overrides config)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="increase verbosity")
    parser.add_argument("--log-file", type=Path, default=None, help="write logs to this file")

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG

    settings = load_settings(args.config)
    configure_logging(settings, level=level, log_file=args.log_file)

    catalogue = SysCodeCatalogue(settings.heuristic)
    try:
        catalogue.parse(args.code_file or settings.code_file, args.subset_file or settings.subset_file)
    except CatalogueLoadError as e:
        raise SystemExit(f"could not load syscodes: {e}")

    args.func(args, catalogue)


if __name__ == "__main__":
    main()
