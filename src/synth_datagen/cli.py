"""
Command-line interface for the synthetic data generator.

Usage:
    synth-datagen generate -r 1000 -o users.csv -c user-info
    synth-datagen generate -r 50000 --columns '[{"name": "ID", "type": "id"}]'
    synth-datagen generate --columns-file columns.json --delimiter ';' --bom
    synth-datagen preview -c product -r 100000
    synth-datagen formats
    synth-datagen presets
    synth-datagen tokens --count 100 --length 12 --types numbers,english --format json -o tokens.json
    synth-datagen serve --port 8000
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .config.models import DatagenConfig
from .config.settings import load_config
from .generators.catalog import list_field_types
from .generators.controller import GenerationController, GenerationStrategy
from .generators.presets import get_preset, list_presets
from .generators.tokens import generate_tokens, preview_tokens, token_filename
from .services.export_service import TOKEN_FORMATS, default_filename, write_result, write_tokens
from .shared.exceptions import DatagenError, GenerationValidationError
from .shared.models import EmailTokenConfig, GenerationRequest, TokenRequest

logger = logging.getLogger(__name__)

DEFAULT_PRESET = "default"


def print_error(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr)


def print_violations(error: GenerationValidationError) -> None:
    print_error("Request is invalid:")
    for violation in error.violations:
        print(f"  - {violation}", file=sys.stderr)


def progress_callback(percent: int, processed: int, total: int) -> None:
    """Progress reporting for batched runs."""
    sys.stdout.write(f"\rProgress: {percent}% ({processed}/{total})")
    sys.stdout.flush()


def format_duration(milliseconds: float) -> str:
    """Format an elapsed duration for CLI output."""
    if milliseconds < 1000:
        return f"{milliseconds:.0f}ms"
    return f"{milliseconds / 1000:.2f}s"


# ================================
# REQUEST ASSEMBLY
# ================================


def _load_columns(args: argparse.Namespace) -> list[Any] | None:
    """Columns from --columns or --columns-file, or None when neither is given."""
    if args.columns is not None:
        raw = args.columns
    elif args.columns_file is not None:
        raw = Path(args.columns_file).read_text(encoding="utf-8")
    else:
        return None

    columns = json.loads(raw)
    if isinstance(columns, dict):
        # A saved configuration: {"rows": ..., "columns": [...]}
        columns = columns.get("columns", columns.get("fields", []))
    if not isinstance(columns, list):
        raise ValueError("Column configuration must be a JSON array")
    return columns


def build_request(args: argparse.Namespace, config: DatagenConfig) -> GenerationRequest:
    """
    Build the generation request from parsed arguments.

    Explicit columns win over a preset; without either the default preset is
    used.

    Raises:
        PresetNotFoundError: If the named preset does not exist
        ValueError: If the column JSON is malformed
    """
    columns = _load_columns(args)
    if columns is None:
        request = get_preset(args.config or DEFAULT_PRESET)
    else:
        request = GenerationRequest.model_validate(
            {"rows": args.rows or 100, "columns": columns}
        )

    if args.rows is not None:
        request.record_count = args.rows
    request.delimiter = args.delimiter or config.output.delimiter
    request.include_header = config.output.include_header and not args.no_header
    request.seed = args.seed
    return request


def build_token_request(args: argparse.Namespace) -> TokenRequest:
    """Build the token request from parsed arguments."""
    pool_types = [name.strip() for name in args.types.split(",") if name.strip()]
    email = None
    if args.email_domain is not None:
        email = EmailTokenConfig(
            domain=args.email_domain,
            username_types=pool_types,
            username_length=args.length,
        )
    return TokenRequest(
        count=args.count,
        length=args.length,
        pool_types=pool_types,
        email=email,
        seed=args.seed,
    )


# ================================
# COMMANDS
# ================================


def cmd_preview(request: GenerationRequest, controller: GenerationController) -> int:
    """Print sample records and the estimates for the full run."""
    preview = controller.preview(request)

    print("\n=== Preview ===\n")
    if preview.header_line is not None:
        print(preview.header_line)
    for line in preview.lines:
        print(line)

    print(f"\nRecords requested: {request.record_count:,}")
    print(f"Estimated file size: {preview.estimated_size}")
    print(f"Estimated generation time: {preview.estimated_time}")
    return 0


async def cmd_generate(args: argparse.Namespace, config: DatagenConfig) -> int:
    """Generate records and write them to a file."""
    request = build_request(args, config)
    controller = GenerationController(config.engine)

    if args.preview:
        return cmd_preview(request, controller)

    strategy = controller.choose_strategy(request.record_count)
    print(f"Generating {request.record_count:,} records ({strategy.value})...")

    result = await controller.run(request, progress_callback)
    if strategy == GenerationStrategy.BATCHED:
        print()

    output = Path(args.output) if args.output else Path(default_filename(result))
    write_result(result, output, bom=args.bom or config.output.bom)

    print("\n=== Generation Complete ===")
    print(f"  File: {output}")
    print(f"  Size: {result.formatted_size}")
    print(f"  Records: {result.record_count:,}")
    print(f"  Fields: {result.field_count}")
    print(f"  Duration: {format_duration(result.elapsed_ms)}")
    return 0


def cmd_formats() -> int:
    """Print the field type catalog."""
    print("Supported field types:\n")
    for info in list_field_types():
        print(f"{info['name']:<12} - {info['label']}: {info['description']}")
        if info["aliases"]:
            print(f"    Aliases: {', '.join(info['aliases'])}")
        if info["options"]:
            print("    Options:")
            for option, description in info["options"].items():
                print(f"      {option}: {description}")
        print()
    return 0


def cmd_presets() -> int:
    """Print the preset summaries."""
    print("Presets:\n")
    for preset in list_presets():
        print(f"Name: {preset['name']}")
        print(f"Description: {preset['description']}")
        print(f"Records: {preset['record_count']}")
        print(f"Fields: {preset['field_count']}")
        print("---")
    return 0


async def cmd_tokens(args: argparse.Namespace, config: DatagenConfig) -> int:
    """Generate text tokens and write them in the chosen format."""
    request = build_token_request(args)

    if args.preview:
        preview = preview_tokens(request)
        print("\n=== Token Preview ===\n")
        for line in preview["preview"]:
            print(line)
        print(f"\nPools: {preview['pool_info']}")
        print(f"Characters available: {preview['total_chars']}")
        print(f"Estimated generation time: {preview['estimated_time']}")
        return 0

    controller = GenerationController(config.engine)
    if controller.choose_strategy(request.count) == GenerationStrategy.BATCHED:
        result = await generate_tokens(request, progress_callback, controller)
        print()
    else:
        result = await generate_tokens(request, controller=controller)

    output = Path(args.output or token_filename(result.count, result.length, args.format))
    write_tokens(result, output, args.format)

    print("\n=== Tokens Complete ===")
    print(f"  File: {output}")
    print(f"  Tokens: {result.count:,}")
    print(f"  Duration: {format_duration(result.elapsed_ms)}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API."""
    from .main import run_dev_server

    run_dev_server(host=args.host, port=args.port, reload=args.reload)
    return 0


async def main(args: argparse.Namespace) -> int:
    """
    Main CLI entry point - routes to subcommands.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        config = load_config(args.config_file)

        if args.command in ("generate", "preview"):
            if args.command == "preview":
                args.preview = True
            return await cmd_generate(args, config)
        elif args.command == "formats":
            return cmd_formats()
        elif args.command == "presets":
            return cmd_presets()
        elif args.command == "tokens":
            return await cmd_tokens(args, config)
        else:
            print_error("No command specified. Use --help for usage information.")
            return 1
    except GenerationValidationError as e:
        print_violations(e)
        return 1
    except DatagenError as e:
        print()
        print_error(str(e))
        return 1
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")
        return 1
    except (OSError, ValueError) as e:
        print_error(str(e))
        return 1


# ================================
# ARGUMENT PARSING
# ================================


def _add_generate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r", "--rows", type=int, default=None, help="Number of records to generate"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--columns", type=str, help="Field specifications as a JSON array")
    source.add_argument(
        "--columns-file", type=str, help="File holding the field specification JSON"
    )
    source.add_argument(
        "-c", "--config", type=str, help="Use a named preset (see 'presets')"
    )
    parser.add_argument(
        "--delimiter", type=str, default=None, help="Single-character field delimiter"
    )
    parser.add_argument(
        "--no-header", action="store_true", help="Omit the header line"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Configurable synthetic data generator",
        prog="synth-datagen",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 100 records with the default preset
  synth-datagen generate

  # Generate 1000 records to a named file
  synth-datagen generate -r 1000 -o my_data.csv

  # Use a preset
  synth-datagen generate -c user-info -r 500

  # Custom fields
  synth-datagen generate --columns '[{"name":"ID","format":"number","config":{"type":"integer","min":1,"max":1000}}]'

  # Show a preview only
  synth-datagen generate --preview -r 10
        """,
    )
    parser.add_argument(
        "--config-file",
        type=str,
        default=None,
        help="Configuration file (default: config.json in the usual locations)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # ===== GENERATE SUBCOMMAND =====
    generate_parser = subparsers.add_parser("generate", help="Generate a delimited file")
    _add_generate_arguments(generate_parser)
    generate_parser.add_argument(
        "-o", "--output", type=str, default=None, help="Output file (default: derived name)"
    )
    generate_parser.add_argument(
        "--bom", action="store_true", help="Prefix the file with a UTF-8 byte-order mark"
    )
    generate_parser.add_argument(
        "--preview", action="store_true", help="Only show a preview, write nothing"
    )

    # ===== PREVIEW SUBCOMMAND =====
    preview_parser = subparsers.add_parser(
        "preview", help="Show sample records and estimates"
    )
    _add_generate_arguments(preview_parser)

    # ===== CATALOG SUBCOMMANDS =====
    subparsers.add_parser("formats", help="Show the supported field types")
    subparsers.add_parser("presets", help="Show the presets")

    # ===== TOKENS SUBCOMMAND =====
    tokens_parser = subparsers.add_parser("tokens", help="Generate text tokens")
    tokens_parser.add_argument("--count", type=int, default=100, help="Number of tokens")
    tokens_parser.add_argument(
        "--length", type=int, default=10, help="Characters per token (username length for emails)"
    )
    tokens_parser.add_argument(
        "--types",
        type=str,
        default="numbers,english",
        help="Comma-separated character pools (default: numbers,english)",
    )
    tokens_parser.add_argument(
        "--email-domain", type=str, default=None, help="Generate emails at this domain"
    )
    tokens_parser.add_argument(
        "--format", choices=TOKEN_FORMATS, default="txt", help="Output format (default: txt)"
    )
    tokens_parser.add_argument("-o", "--output", type=str, default=None, help="Output file")
    tokens_parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    tokens_parser.add_argument(
        "--preview", action="store_true", help="Only show a preview, write nothing"
    )

    # ===== SERVE SUBCOMMAND =====
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)
    return args


def run(argv: list[str] | None = None) -> int:
    """Parse ``argv`` and run the command, returning the exit code."""
    args = parse_args(argv)
    if args.command == "serve":
        return cmd_serve(args)
    return asyncio.run(main(args))


def entrypoint() -> None:
    sys.exit(run())


if __name__ == "__main__":
    entrypoint()
