"""Command-line entry point.

Usage:
    mysql-config-diff [options] --cnf my.cnf --dsn h=127.0.0.1,u=root
    python -m mysql_config_diff [options] --cnf a.cnf --cnf b.cnf
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .database import ServerConnectionConfig, ServerConnectionManager, parse_dsn
from .diff import DiffEngine, SkipPolicy
from .exceptions import ConfigDiffError, LiveServerError
from .models import CanonicalConfig, SourceKind
from .output import OutputFormat, format_report
from .readers import read_cnf, read_defaults, read_live
from .settings import AppSettings, LogLevel, load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class SourceSpec:
    """A source requested on the command line."""

    kind: SourceKind
    location: str


class _SourceAction(argparse.Action):
    """Collects every source flag into one list, keeping command-line order."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        sources = list(getattr(namespace, self.dest, None) or [])
        sources.append(SourceSpec(self.const, values))
        setattr(namespace, self.dest, sources)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mysql-config-diff",
        description="Compare MySQL option files, live servers and defaults listings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The first source given is the comparison base; every later source is compared
against it.

Examples:
  # Option file against the running server
  mysql-config-diff --cnf /etc/mysql/my.cnf --dsn h=127.0.0.1,P=3306,u=root
  # Two servers
  mysql-config-diff --dsn h=db1,u=audit,p=secret --dsn h=db2,u=audit,p=secret
  # Non-default settings of an option file, as JSON
  mysql-config-diff -o prettyJson --fold-dashes --cnf my.cnf --defaults defaults.txt""",
    )

    parser.add_argument(
        "-c",
        "--cnf",
        dest="sources",
        action=_SourceAction,
        const=SourceKind.FILE,
        metavar="PATH",
        help="Option file to read (repeatable)",
    )
    parser.add_argument(
        "-d",
        "--dsn",
        dest="sources",
        action=_SourceAction,
        const=SourceKind.LIVE,
        metavar="DSN",
        help="Live server DSN, e.g. h=127.0.0.1,P=3306,u=root,p=pass (repeatable)",
    )
    parser.add_argument(
        "--defaults",
        dest="sources",
        action=_SourceAction,
        const=SourceKind.DEFAULTS,
        metavar="PATH",
        help="Output of 'mysqld --verbose --help' (repeatable)",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=[f.value for f in OutputFormat],
        help="Output format (default: plain)",
    )
    parser.add_argument(
        "--section", help="Option file section to read (default: mysqld)"
    )
    parser.add_argument(
        "--fold-dashes",
        action="store_true",
        default=None,
        help="Treat '-' and '_' in option file names alike",
    )
    parser.add_argument(
        "--suppress-like-kinds",
        action="store_true",
        help="Skip one-sided keys between two servers or two defaults listings",
    )
    parser.add_argument("--settings", metavar="FILE", help="YAML settings file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=[level.value for level in LogLevel],
        help="Log level (default: WARNING)",
    )

    return parser


def apply_arguments(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    """Override settings with the flags given on the command line."""
    update: dict[str, Any] = {}
    if args.output:
        update["output_format"] = OutputFormat(args.output)
    if args.log_level:
        update["log_level"] = LogLevel(args.log_level)
    if args.section:
        update["cnf_section"] = args.section
    if args.fold_dashes:
        update["fold_dashes"] = True
    if args.suppress_like_kinds:
        update["report_like_kinds"] = False
    return settings.model_copy(update=update)


async def read_source(spec: SourceSpec, settings: AppSettings) -> CanonicalConfig:
    """Build the snapshot for one requested source."""
    if spec.kind is SourceKind.FILE:
        return read_cnf(
            spec.location,
            section=settings.cnf_section,
            fold_dashes=settings.fold_dashes,
        )
    if spec.kind is SourceKind.DEFAULTS:
        return read_defaults(spec.location)

    dsn = parse_dsn(spec.location)
    try:
        config = ServerConnectionConfig.from_dsn(
            dsn, connect_timeout=settings.connect_timeout
        )
    except ValidationError as e:
        raise LiveServerError(
            f"Invalid connection settings for {dsn}: {e}", source=str(dsn)
        ) from e

    async with ServerConnectionManager(config) as manager:
        return await read_live(manager)


async def read_sources(
    specs: Sequence[SourceSpec], settings: AppSettings
) -> list[CanonicalConfig]:
    """Build snapshots for all sources, in order."""
    return [await read_source(spec, settings) for spec in specs]


def run(argv: Sequence[str] | None = None) -> int:
    """Run the tool and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    specs: list[SourceSpec] = args.sources or []
    if len(specs) < 2:
        parser.error("at least two sources (--cnf, --dsn, --defaults) are required")

    try:
        settings = apply_arguments(load_settings(args.settings), args)
    except ConfigDiffError as e:
        print(f"Cannot load settings: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level.value),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        configs = asyncio.run(read_sources(specs, settings))
    except ConfigDiffError as e:
        logger.error("Cannot get configs", extra={"error": str(e)})
        print(f"Cannot get configs: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Comparison interrupted by user", file=sys.stderr)
        return 1

    engine = DiffEngine(policy=SkipPolicy(report_like_kinds=settings.report_like_kinds))
    report = engine.compare(configs)
    logger.info(
        "Comparison finished",
        extra={
            "sources": [config.describe() for config in configs],
            "differences": len(report),
        },
    )

    output = format_report(report, settings.output_format)
    if output and not output.endswith("\n"):
        output += "\n"
    sys.stdout.write(output)
    return 0


def main() -> None:
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
