"""Command-line interface for json-schema-diff."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .comparer import TreeComparer
from .exceptions import JsonSchemaDiffError
from .formatter import Formatter
from .models import DiffConfig, OutputFormat
from .schema import SchemaIndex
from .utils import load_json_file


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-schema-diff",
        description="Compare two JSON files using a JSON Schema to guide and annotate the diff output.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  json-schema-diff schema.json old.json new.json
  json-schema-diff -f json -i metadata.updated_at,items[0].id schema.json old.json new.json
  json-schema-diff --config diff.yaml --no-color schema.yaml old.json new.json
        """
    )

    parser.add_argument("schema", metavar="SCHEMA", help="Path to JSON Schema file")
    parser.add_argument("old", metavar="OLD_JSON", help="Path to baseline JSON file")
    parser.add_argument("new", metavar="NEW_JSON", help="Path to comparison JSON file")

    # Overridable options default to None so config file values survive
    parser.add_argument(
        "-f", "--format",
        dest="output_format",
        choices=[f.value for f in OutputFormat],
        help="Output format (default: pretty)"
    )
    parser.add_argument(
        "-i", "--ignore-fields",
        help="Comma-separated list of field paths to ignore"
    )
    parser.add_argument(
        "--color",
        dest="use_color",
        action=argparse.BooleanOptionalAction,
        help="Enable/disable colored output (default: enabled)"
    )
    parser.add_argument(
        "--validate",
        dest="validate_schema",
        action=argparse.BooleanOptionalAction,
        help="Enable/disable schema structure validation (default: enabled)"
    )
    parser.add_argument(
        "--validate-json",
        action=argparse.BooleanOptionalAction,
        help="Enable/disable JSON validation against schema (default: disabled)"
    )
    parser.add_argument("-c", "--config", help="Path to YAML config file")
    parser.add_argument("-o", "--output", help="Write the report to a file instead of stdout")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)"
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"json-schema-diff {__version__}"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> DiffConfig:
    """Merge config file values with command-line overrides."""
    config = DiffConfig.from_file(args.config) if args.config else DiffConfig()

    if args.output_format is not None:
        config.output_format = OutputFormat(args.output_format)
    if args.ignore_fields is not None:
        config.ignore_fields = [p.strip() for p in args.ignore_fields.split(",") if p.strip()]
    if args.use_color is not None:
        config.use_color = args.use_color
    if args.validate_schema is not None:
        config.validate_schema = args.validate_schema
    if args.validate_json is not None:
        config.validate_json = args.validate_json
    if args.log_level is not None:
        config.log_level = args.log_level

    return config


def run(args: argparse.Namespace) -> str:
    """
    Run a comparison and return the rendered report.

    Raises:
        JsonSchemaDiffError: On schema, validation or config problems
        FileNotFoundError: If an input file is missing
        OSError: If an input file cannot be read
        json.JSONDecodeError: If an input file is not valid JSON
    """
    config = resolve_config(args)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    schema = SchemaIndex.from_file(args.schema, validate_schema=config.validate_schema)
    comparer = TreeComparer(schema, config.ignore_fields)

    old_json = load_json_file(args.old)
    new_json = load_json_file(args.new)

    if config.validate_json:
        schema.validate_json(old_json)
        schema.validate_json(new_json)

    changes = comparer.compare(old_json, new_json)
    logger.info("Compared %s and %s: %d change(s)", args.old, args.new, len(changes))

    use_color = config.use_color and not args.output
    formatter = Formatter(config.output_format, use_color)
    return formatter.format(changes)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        report = run(args)
    except json.JSONDecodeError as e:
        print(f"Error parsing JSON: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"File not found: {e.filename or e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot read file: {e.filename or e} ({e.strerror})", file=sys.stderr)
        return 1
    except JsonSchemaDiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(report + "\n", encoding="utf-8")
    else:
        print(report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
