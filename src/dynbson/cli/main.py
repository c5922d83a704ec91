"""Main CLI entry point for dynbson."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .. import __version__
from ..codec.decoder import decode
from ..codec.encoder import encode
from ..exceptions import DynbsonError
from ..models.options import DecoderOptions
from .inspect import inspect_file

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if hasattr(value, "__dict__"):
        return vars(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_file(file_path: Path, output: Path | None) -> None:
    """Encode a JSON file to BSON, writing to output or hex to stdout."""
    with file_path.open(encoding="utf-8") as fh:
        value = json.load(fh)
    data = encode(value)
    if output is None:
        print(data.hex())
    else:
        output.write_bytes(data)
        logger.info("Wrote %d bytes to %s", len(data), output)


def decode_file(file_path: Path, options: DecoderOptions) -> None:
    """Decode a BSON file and print it as JSON."""
    value = decode(file_path.read_bytes(), options)
    print(json.dumps(value, indent=2, ensure_ascii=False, default=_json_default))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the dynbson CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="dynbson",
        description="dynbson: BSON codec for dynamic values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dynbson --encode value.json -o value.bson   Encode JSON to BSON
  dynbson --decode value.bson                  Print a BSON document as JSON
  dynbson --inspect value.bson                 Show element layout and sizes
  dynbson --version                            Show version
        """,
    )

    command = parser.add_mutually_exclusive_group()
    command.add_argument(
        "--encode",
        metavar="FILE",
        type=str,
        help="Encode a JSON file to BSON",
    )
    command.add_argument(
        "--decode",
        metavar="FILE",
        type=str,
        help="Decode a BSON file and print it as JSON",
    )
    command.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Show the element layout of a BSON file",
    )

    parser.add_argument(
        "-o",
        "--output",
        metavar="PATH",
        type=str,
        help="Write encoded BSON here instead of printing hex",
    )
    parser.add_argument(
        "--array-type",
        choices=["list", "dict"],
        default="list",
        help="Shape of decoded arrays (default: list)",
    )
    parser.add_argument(
        "--numeric-keys",
        action="store_true",
        help="Decode decimal document keys as integers",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"dynbson {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    target = args.encode or args.decode or args.inspect
    if target is None:
        # If no command specified, show help
        parser.print_help()
        return 0

    file_path = Path(target)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    try:
        if args.encode:
            encode_file(file_path, Path(args.output) if args.output else None)
        elif args.decode:
            options = DecoderOptions(array_type=args.array_type, numeric_keys=args.numeric_keys)
            decode_file(file_path, options)
        else:
            inspect_file(file_path)
        return 0
    except (DynbsonError, OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error processing {file_path}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
