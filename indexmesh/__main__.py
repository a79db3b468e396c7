"""
indexmesh CLI Entrypoint

Commands:
    indexmesh index   Print the keys to save with a document
    indexmesh filter  Print the keys a query looks up

Example:
    python -m indexmesh index --composite status,type \\
        --add status=open --add type=bug --biunigrams title="crash on start"

Defaults come from INDEXMESH_* environment variables; flags override them.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Optional, Sequence, Union

from indexmesh.core.config import IndexConfig, IndexMeshConfig
from indexmesh.index.filters import Filters
from indexmesh.index.indexes import Indexes
from indexmesh.observability.logging import LogLevel, StructuredLogger, setup_logging


def _label_value(raw: str) -> tuple[str, str]:
    label, sep, value = raw.partition("=")
    if not sep or not label:
        raise argparse.ArgumentTypeError(f"expected LABEL=VALUE, got {raw!r}")
    return label, value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="indexmesh",
        description="Extra index keys for exact-match document stores",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for command, help_text in (
        ("index", "Print the keys to save with a document"),
        ("filter", "Print the keys a query looks up"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--composite",
            type=str,
            default=None,
            help="Comma separated composite labels (default: INDEXMESH_COMPOSITE_LABELS)",
        )
        sub.add_argument(
            "--ignore-case",
            action="store_true",
            default=None,
            help="Lowercase every token",
        )
        sub.add_argument(
            "--save-no-filters",
            action="store_true",
            default=None,
            help="Emit the no-filters key when nothing else is built",
        )
        for flag, flag_help in (
            ("--add", "Add VALUE unchanged"),
            ("--bigrams", "Add bigrams of TEXT"),
            ("--biunigrams", "Add bigrams and unigrams of TEXT"),
            ("--prefix", "Add prefixes of TEXT (filter: TEXT as a single prefix)"),
            ("--suffix", "Add suffixes of TEXT (filter: TEXT as a single suffix)"),
        ):
            sub.add_argument(
                flag,
                type=_label_value,
                action="append",
                default=[],
                metavar="LABEL=TEXT",
                help=flag_help,
            )
        sub.add_argument(
            "--log-level",
            choices=[level.name for level in LogLevel],
            default=None,
            help="Log level (default: INDEXMESH_LOG_LEVEL or INFO)",
        )

    return parser


def _get_version() -> str:
    from indexmesh import __version__
    return __version__


def _resolve_config(args: argparse.Namespace, base: IndexConfig) -> IndexConfig:
    overrides = {}
    if args.composite is not None:
        overrides["composite_labels"] = tuple(
            label.strip() for label in args.composite.split(",") if label.strip()
        )
    if args.ignore_case is not None:
        overrides["ignore_case"] = args.ignore_case
    if args.save_no_filters is not None:
        overrides["save_no_filters_index"] = args.save_no_filters
    return replace(base, **overrides)


def _fill(builder: Union[Indexes, Filters], args: argparse.Namespace) -> None:
    for label, value in args.add:
        builder.add(label, value)
    for label, text in args.bigrams:
        builder.add_bigrams(label, text)
    for label, text in args.biunigrams:
        builder.add_biunigrams(label, text)
    for label, text in args.prefix:
        if isinstance(builder, Filters):
            builder.add_prefix(label, text)
        else:
            builder.add_prefixes(label, text)
    for label, text in args.suffix:
        if isinstance(builder, Filters):
            builder.add_suffix(label, text)
        else:
            builder.add_suffixes(label, text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entrypoint. Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    env_result = IndexMeshConfig.from_env()
    if env_result.is_err():
        print(env_result.error, file=sys.stderr)
        return 1
    env_config = env_result.unwrap()

    level_name = args.log_level or env_config.observability.log_level
    if level_name.upper() not in LogLevel.__members__:
        print(f"Unknown log level: {level_name}", file=sys.stderr)
        return 1
    setup_logging(
        LogLevel.from_name(level_name),
        json_output=env_config.observability.log_json,
    )

    validated = _resolve_config(args, env_config.index).validate()
    if validated.is_err():
        print(f"Configuration error: {validated.error.message}", file=sys.stderr)
        return 1

    builder = Indexes(validated.unwrap()) if args.command == "index" else Filters(validated.unwrap())
    _fill(builder, args)

    with StructuredLogger.context(command=args.command):
        built = builder.build()
    if built.is_err():
        print(f"Build error: {built.error.message}", file=sys.stderr)
        return 1

    print(json.dumps(sorted(built.unwrap()), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
