"""
Command-line interface for tacdraw.

Lists the supported symbols and renders symbol previews from the shell.
"""

import argparse
import sys

from tacdraw.config import load_config, save_default_config
from tacdraw.errors import SymbologyError
from tacdraw.tracer import configure_tracer, get_tracer


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="tacdraw: synthesize tactical graphics from base geometries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # List command
    subparsers.add_parser("list", help="List supported symbol identifiers")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render one symbol to SVG")
    render_parser.add_argument(
        "--sidc", "-s",
        required=True,
        help="Symbol identifier, e.g. G*T*X-----",
    )
    render_parser.add_argument(
        "--coords",
        required=True,
        help='Base line coordinates as "x,y x,y ..."',
    )
    render_parser.add_argument(
        "--width", "-w",
        type=float,
        required=True,
        help="Symbol width in map units",
    )
    render_parser.add_argument(
        "--resolution", "-r",
        type=float,
        default=1.0,
        help="Map units per pixel",
    )
    render_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output SVG path",
    )
    render_parser.add_argument(
        "--json",
        default=None,
        help="Also write the primitives as JSON to this path",
    )
    render_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    render_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    render_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    render_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    render_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="tacdraw_config.yaml",
        help="Output path for config file",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "list":
        return handle_list(args)
    elif args.command == "render":
        return handle_render(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def parse_coords(text):
    """Parse "x,y x,y ..." into a list of (x, y) tuples."""
    coords = []
    for pair in text.split():
        try:
            x, y = pair.split(",")
            coords.append((float(x), float(y)))
        except ValueError as e:
            raise argparse.ArgumentTypeError(f"bad coordinate pair {pair!r}") from e
    return coords


def handle_list(args):
    """Handle the list command."""
    from tacdraw.synthesis import get_registry

    for identifier in get_registry().identifiers():
        print(identifier)
    return 0


def handle_render(args):
    """Handle the render command."""
    config = load_config(args.config)

    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=args.trace_json or config.tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from tacdraw.export.svg_preview import render_preview
        from tacdraw.io.save_artifacts import save_json, save_svg
        from tacdraw.synthesis import kernel_from_config, synthesize

        with tracer.span("cli_render", module="cli"):
            primitives = synthesize(
                args.sidc,
                parse_coords(args.coords),
                args.width,
                args.resolution,
                kernel=kernel_from_config(config),
            )

            if primitives is None:
                print(f"\nError: no style registered for {args.sidc}", file=sys.stderr)
                return 1

            save_svg(render_preview(primitives, config, title=args.sidc), args.out)
            if args.json:
                save_json(primitives, args.json)

        print(f"\nRendered {args.sidc} with {len(primitives)} primitives.")
        print(f"  - {args.out}")
        if args.json:
            print(f"  - {args.json}")

        return 0

    except (SymbologyError, argparse.ArgumentTypeError, OSError) as e:
        tracer.event(f"Render failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
