"""CLI entry point: python -m menuparser URL [URL ...] [options]"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from menuparser import settings
from menuparser.config import ExtractorConfig, load_config
from menuparser.items import ExtractionResult
from menuparser.pipeline import MenuExtractor

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_USAGE = 1
EXIT_NOT_FOUND = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="menuparser",
        description=(
            "Find a restaurant menu behind candidate URLs and print it as JSON.\n"
            "Candidates are tried in the order given; the first menu found wins."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("urls", nargs="+", metavar="URL",
                        help="Candidate URLs, best first")
    parser.add_argument("--render-js", action="store_true", default=False,
                        help="Re-scan pages rendered by headless Chromium (default: off)")
    parser.add_argument("--no-crawl", action="store_true", default=False,
                        help="Do not follow menu links from the candidate's homepage")
    parser.add_argument("--max-bytes", type=int, default=None, metavar="N",
                        help=f"Payload size cap in bytes (default: {settings.MAX_PAGE_BYTES})")
    parser.add_argument("--timeout", type=int, default=None, metavar="SECONDS",
                        help=f"Fetch timeout in seconds (default: {settings.FETCH_TIMEOUT})")
    parser.add_argument("--config", default=None, metavar="FILE",
                        help="YAML config with 'default' and per-domain 'domains' blocks")
    parser.add_argument("--out", default=None, metavar="FILE",
                        help="Write the menu JSON here instead of stdout")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {settings.LOG_LEVEL})")
    parser.add_argument("--quiet", action="store_true", default=False,
                        help="No banner or summary table; log warnings only")
    return parser


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.render_js:
        overrides["enable_headless_render"] = True
    if args.no_crawl:
        overrides["enable_page_crawl"] = False
    if args.max_bytes is not None:
        overrides["max_page_bytes"] = args.max_bytes
    if args.timeout is not None:
        overrides["fetch_timeout"] = args.timeout
    return overrides


def _config_for(args: argparse.Namespace, url: str) -> ExtractorConfig:
    """Config file (matched to *url*'s domain) first, command-line flags on top."""
    base = load_config(args.config, url) if args.config else ExtractorConfig()
    return base.merged(_cli_overrides(args))


def _print_banner(args: argparse.Namespace) -> None:
    try:
        from rich.console import Console
        from rich.panel import Panel

        console = Console(stderr=True)
        console.print(
            Panel.fit(
                f"[bold cyan]MenuParser[/bold cyan]\n"
                f"Candidates:     [green]{len(args.urls)}[/green]\n"
                f"Render JS:      {'on' if args.render_js else 'off'}\n"
                f"Homepage crawl: {'off' if args.no_crawl else 'on'}\n"
                f"Config:         {args.config or '-'}\n"
                f"Output:         [yellow]{args.out or 'stdout'}[/yellow]",
                border_style="cyan",
                title="[bold]Configuration[/bold]",
            ),
        )
    except ImportError:
        print(f"MenuParser | candidates: {len(args.urls)}", file=sys.stderr)


def _print_summary(attempts: list[tuple[str, ExtractionResult]]) -> None:
    try:
        from rich import box
        from rich.console import Console
        from rich.table import Table

        console = Console(stderr=True)
        tbl = Table(
            title="[bold cyan]Candidates[/bold cyan]",
            box=box.SIMPLE_HEAVY,
            show_lines=False,
        )
        tbl.add_column("#",        style="dim",   justify="right", width=4, no_wrap=True)
        tbl.add_column("URL",      style="blue",  max_width=50,             no_wrap=True)
        tbl.add_column("Found",    justify="center", width=6,               no_wrap=True)
        tbl.add_column("Source",   style="green", max_width=50,             no_wrap=True)
        tbl.add_column("Sections", justify="right", width=8,                no_wrap=True)
        tbl.add_column("Items",    justify="right", width=6,                no_wrap=True)

        for i, (url, result) in enumerate(attempts, 1):
            sections = result.menu.sections
            tbl.add_row(
                str(i),
                url[:50],
                "[green]yes[/green]" if result.found else "[red]no[/red]",
                (result.source_url or "-")[:50],
                str(len(sections)),
                str(sum(len(s.items) for s in sections)),
            )
        console.print(tbl)
    except Exception as exc:
        logger.debug("Rich summary display failed: %s", exc)


def _write_output(result: ExtractionResult, out: str | None) -> None:
    payload = result.menu.to_json(indent=2) if result.found else "null"
    if out:
        path = Path(out)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload + "\n", encoding="utf-8")
    else:
        sys.stdout.write(payload + "\n")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return EXIT_FOUND if exc.code == 0 else EXIT_USAGE

    level = "WARNING" if args.quiet else args.log_level
    logging.basicConfig(level=level, format=settings.LOG_FORMAT, stream=sys.stderr)

    if args.config and not Path(args.config).is_file():
        print(f"ERROR: config file not found: {args.config}", file=sys.stderr)
        return EXIT_USAGE
    try:
        configs = [(url, _config_for(args, url)) for url in args.urls]
    except (ValueError, TypeError, OSError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if not args.quiet:
        _print_banner(args)

    attempts: list[tuple[str, ExtractionResult]] = []
    result = ExtractionResult.not_found()
    for url, cfg in configs:
        with MenuExtractor(cfg) as extractor:
            result = extractor.try_extract_menu(url)
        attempts.append((url, result))
        if result.found:
            break

    if not args.quiet:
        _print_summary(attempts)

    _write_output(result, args.out)
    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
