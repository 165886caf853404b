"""Command-line interface for SheetShift."""

import argparse
import sys
from pathlib import Path

import uvicorn

from .config import configure_logging, settings


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="SheetShift - AI-assisted spreadsheet column remapping"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Convert command
    convert_parser = subparsers.add_parser(
        "convert", help="Remap a spreadsheet's columns from a description"
    )
    convert_parser.add_argument("input", help="Spreadsheet to convert (.xlsx, .xls, .csv, .tsv)")
    convert_parser.add_argument(
        "--describe", "-d", required=True, help="Description of the desired output layout"
    )
    convert_parser.add_argument(
        "--output",
        "-o",
        default=settings.default_output_filename,
        help=f"Output file (default: {settings.default_output_filename})",
    )

    # Template command
    template_parser = subparsers.add_parser(
        "template", help="Generate a blank layout from a description"
    )
    template_parser.add_argument(
        "--describe", "-d", required=True, help="Description of the desired layout"
    )
    template_parser.add_argument("--output", "-o", help="Write the template to this xlsx file")

    args = parser.parse_args(argv)
    configure_logging(settings.log_level)

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "convert":
        sys.exit(run_convert(args.input, args.describe, args.output))
    elif args.command == "template":
        sys.exit(run_template(args.describe, args.output))
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "sheetshift.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def _build_client():
    from .inference import MappingInferenceClient
    from .llm import InferenceCallLogger

    call_logger = None
    if settings.enable_call_logging:
        call_logger = InferenceCallLogger(settings.call_log_path)
    return MappingInferenceClient(settings, call_logger=call_logger)


def run_convert(input_path: str, description: str, output_path: str) -> int:
    """Convert a file end to end. Returns the process exit code."""
    from .session import ConversionSession
    from .tables import ReadError, save_workbook

    path = Path(input_path)
    session = ConversionSession(_build_client())
    try:
        source = session.load_file(path.read_bytes(), path.name)
    except (OSError, ReadError) as e:
        print(f"Error: could not read {path}: {e}")
        return 1

    print(f"Loaded '{source.sheet_name}': {len(source.headers)} columns, {source.row_count} rows")

    session.analyze(description)
    for suggestion in session.suggestions:
        print(f"  - {suggestion}")

    if not session.can_export:
        print("No column mapping was produced; nothing written.")
        return 1

    for target, source_name in session.column_mapping.items():
        print(f"  {target} <- {source_name}")

    written = save_workbook([session.build_output()], output_path)
    print(f"Wrote {written}")
    return 0


def run_template(description: str, output_path: str = None) -> int:
    """Generate a template layout. Returns the process exit code."""
    from .tables import save_workbook

    result = _build_client().generate_template(description)
    if result.error:
        print(f"Error: {result.error}")
        return 1
    if not result.headers:
        print("No template was produced.")
        return 1

    print(" | ".join(result.headers))
    print(" | ".join(result.sample_row))

    if output_path:
        written = save_workbook([result.to_table()], output_path)
        print(f"Wrote {written}")
    return 0


if __name__ == "__main__":
    main()
