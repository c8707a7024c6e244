"""CLI interface for the save codec pipeline."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from save_codec.application.classifier import split_name
from save_codec.application.codec_service import SaveCodecService
from save_codec.domain.configuration import CodecConfig, with_cli_overrides
from save_codec.domain.errors import SaveCodecError
from save_codec.domain.models import EditSession
from save_codec.shared.logging import configure_logger


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="save-codec",
        description="Detect, decode and re-encode game save files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show which encoding a save uses
  %(prog)s probe file1.rpgsave

  # Decode a save into an editable session document
  %(prog)s decode file1.rpgsave --output file1.session.json

  # Re-encode an edited session next to the original
  %(prog)s encode file1.session.json --output-dir edited/
        """,
    )
    parser.add_argument(
        "--max-decoded-bytes",
        type=int,
        help="Refuse payloads that decompress beyond this many bytes",
    )
    parser.add_argument(
        "--indent",
        type=int,
        dest="json_indent",
        help="Indent plain JSON output (default: compact)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every strategy attempt",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    probe = sub.add_parser("probe", help="Print the detected format tag")
    probe.add_argument("save", type=Path, help="Save file path")

    decode = sub.add_parser("decode", help="Decode a save into a session document")
    decode.add_argument("save", type=Path, help="Save file path")
    decode.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Session document path (default: <base>.session.json next to the save)",
    )

    encode = sub.add_parser("encode", help="Re-encode a session document")
    encode.add_argument("session", type=Path, help="Session document path")
    encode.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        help="Directory for the re-encoded save (default: next to the session)",
    )

    return parser


def _cmd_probe(service: SaveCodecService, args: argparse.Namespace) -> int:
    result = service.load_path(args.save)
    print(f"{args.save.name}\t{result.format.value}\t{result.category.value}")
    return 0


def _cmd_decode(service: SaveCodecService, args: argparse.Namespace) -> int:
    result = service.load_path(args.save)
    session = EditSession.from_result(result)
    output = args.output
    if output is None:
        base_name = split_name(args.save.name)[0] or "save"
        output = args.save.with_name(f"{base_name}.session.json")
    try:
        document = json.dumps(session.to_dict(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Decoded value cannot be stored as a session document: {exc}") from exc
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    print(f"Detected {result.format.value}; session written to: {output}")
    return 0


def _cmd_encode(service: SaveCodecService, args: argparse.Namespace) -> int:
    payload = json.loads(args.session.read_text(encoding="utf-8"))
    session = EditSession.from_dict(payload)
    encoded = service.save_session(session)
    output_dir = args.output_dir or args.session.parent
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / encoded.suggested_file_name
    target.write_bytes(encoded.data)
    print(f"Encoded {session.format.value} ({encoded.mime_type}) to: {target}")
    return 0


COMMANDS = {
    "probe": _cmd_probe,
    "decode": _cmd_decode,
    "encode": _cmd_encode,
}


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command line arguments (for testing)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = with_cli_overrides(
            CodecConfig(),
            {
                "max_decoded_bytes": args.max_decoded_bytes,
                "json_indent": args.json_indent,
            },
        )
        configure_logger(config.logging, logging.DEBUG if args.verbose else logging.WARNING)
        service = SaveCodecService(config)
        return COMMANDS[args.command](service, args)
    except (SaveCodecError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
