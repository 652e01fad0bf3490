from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from igview.bundle.loader import load_bundle
from igview.cli import output as out
from igview.cli.config import (
    Config,
    config_exists,
    config_path_display,
    load_config,
    save_config,
)
from igview.core.exceptions import InsufficientDataError
from igview.facade.core import parse_export
from igview.facade.types import ParseResult

DESCRIPTION = """\
igview — rebuild a browsable model from an Instagram data export

Point igview at an extracted export folder or the downloaded .zip archive.
It recovers the profile, posts (including carousels and archived posts),
stories, followers and following across export format versions, and
matches the media URIs inside the JSON to the files in the bundle.

Everything runs locally; nothing is uploaded."""


# ── Infrastructure helpers ──────────────────────────────────────────


async def _parse(path: str) -> ParseResult:
    try:
        files = load_bundle(path)
    except (OSError, ValueError) as exc:
        out.error(str(exc))
        sys.exit(1)
    result = await parse_export(files)
    try:
        result.raise_if_insufficient()
    except InsufficientDataError as exc:
        out.error(exc.message)
        _print_logs(result)
        sys.exit(2)
    return result


def _print_logs(result: ParseResult) -> None:
    out.header("Parser log")
    out.parser_log(list(result.diagnostics))


def _print_summary(result: ParseResult) -> None:
    profile = result.export.profile
    stats = result.stats()

    out.header(f"@{profile.username}")
    if profile.full_name:
        out.kv("Name", profile.full_name)
    if profile.biography:
        out.kv("Bio", profile.biography)
    out.kv("Profile picture", profile.profile_pic_url or out.dim("none"))
    print()
    out.kv("Posts", stats.posts)
    out.kv("Archived", stats.archived)
    out.kv("Stories", stats.stories)
    out.kv("Followers", stats.followers)
    out.kv("Following", stats.following)


# ── parse / resolve / debug ─────────────────────────────────────────


async def cmd_parse(args: argparse.Namespace) -> None:
    """Parse an export and write the normalized model as JSON."""
    cfg = load_config()
    result = await _parse(args.path)
    _print_summary(result)

    if args.out:
        dest = Path(args.out)
        dest.parent.mkdir(parents=True, exist_ok=True)
    else:
        cfg.ensure_dirs()
        dest = cfg.output_path / f"{result.export.profile.username}.json"

    payload = result.export.model_dump(mode="json", exclude_none=True)
    dest.write_text(
        json.dumps(payload, indent=cfg.indent or None, ensure_ascii=False),
        encoding="utf-8",
    )
    print()
    out.success(f"Normalized export written to {dest}")

    if cfg.show_diagnostics or args.logs:
        _print_logs(result)


async def cmd_resolve(args: argparse.Namespace) -> None:
    """Resolve URIs against the bundle's locator index."""
    result = await _parse(args.path)
    uris = args.uris or result.unresolved_uris()
    if not args.uris:
        out.header(f"Unresolved model URIs ({len(uris)})")

    missing = 0
    for uri in uris:
        locator = result.locators.resolve(uri)
        if locator is None:
            missing += 1
            out.unresolved(uri)
        else:
            out.resolved(uri, locator)
    if missing and args.uris:
        sys.exit(1)


async def cmd_debug(args: argparse.Namespace) -> None:
    """Print counts, samples and the parser log."""
    result = await _parse(args.path)
    report = result.debug_report()

    out.header("Parsed Data Stats")
    out.kv("Total Media", len(result.export.media))
    out.kv("Archived Found", report.stats.archived)
    out.kv("Stories Found", report.stats.stories)
    out.kv("Profile", report.username)

    out.header("Map Stats")
    out.kv("Locator Entries", report.stats.locator_keys)
    out.kv("Files Detected", report.stats.files)

    out.header("Sample Media URIs (from JSON)")
    out.block(json.dumps(report.media_sample, indent=2).splitlines())
    out.header("Sample Locator Keys (generated from files)")
    out.block(report.locator_keys_sample)
    out.header("Actual File Paths Detected")
    out.block(report.file_paths_sample)
    out.header("Archived Debug")
    if report.archived_sample:
        out.block(json.dumps(report.archived_sample, indent=2).splitlines())
    else:
        out.info("No archived posts found in parsed data.")
    out.header("Unresolved URIs")
    out.block(report.unresolved_uris or ["(none)"])
    _print_logs(result)


# ── config ──────────────────────────────────────────────────────────


async def cmd_config_show(args: argparse.Namespace) -> None:
    """Display current configuration."""
    cfg = load_config()

    out.header(f"Configuration ({config_path_display()})")
    print()
    out.kv("Output directory", cfg.output_dir)
    out.kv("JSON indent", cfg.indent)
    out.kv("Show parser log", "yes" if cfg.show_diagnostics else "no")
    print()


async def cmd_config_set_output_dir(args: argparse.Namespace) -> None:
    cfg = load_config() if config_exists() else Config()
    cfg.output_dir = args.dir
    path = save_config(cfg)
    out.success(f"Output directory set to {args.dir}. Config written to {path}")


# ── Parser ──────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="igview",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each resolution step",
    )
    sub = parser.add_subparsers(dest="command")

    p_parse = sub.add_parser("parse", help="Parse an export and write normalized JSON")
    p_parse.add_argument("path", help="Export folder or .zip archive")
    p_parse.add_argument("--out", metavar="PATH", help="Output file path")
    p_parse.add_argument("--logs", action="store_true", help="Print the parser log")

    p_resolve = sub.add_parser("resolve", help="Resolve media URIs to bundle files")
    p_resolve.add_argument("path", help="Export folder or .zip archive")
    p_resolve.add_argument(
        "uris",
        nargs="*",
        help="URIs to resolve (default: list every unresolved model URI)",
    )

    p_debug = sub.add_parser("debug", help="Show counts, samples and the parser log")
    p_debug.add_argument("path", help="Export folder or .zip archive")

    p_cfg = sub.add_parser("config", help="View and change settings")
    cfg_sub = p_cfg.add_subparsers(dest="config_command")
    cfg_sub.add_parser("show", help="Show current settings")
    p_cfg_out = cfg_sub.add_parser("set-output-dir", help="Change the output directory")
    p_cfg_out.add_argument("dir", help="Directory for normalized exports")

    return parser


_COMMAND_MAP = {
    "parse": cmd_parse,
    "resolve": cmd_resolve,
    "debug": cmd_debug,
}

_CONFIG_MAP = {
    "show": cmd_config_show,
    "set-output-dir": cmd_config_set_output_dir,
}


def main() -> None:
    import logging

    parser = _build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="  %(name)s: %(message)s",
        )

    if not args.command:
        parser.print_help()
        return

    if args.command == "config":
        if not args.config_command:
            parser.parse_args(["config", "--help"])
            return
        handler = _CONFIG_MAP.get(args.config_command)
    else:
        handler = _COMMAND_MAP.get(args.command)

    if handler is None:
        parser.print_help()
        return

    try:
        asyncio.run(handler(args))
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
