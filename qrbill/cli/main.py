"""CLI interface for validating, normalizing and generating payment documents."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import get_app_name, get_app_version, get_log_level, get_strict_mode
from ..config.profile_loader import list_available_profiles, load_profile
from ..models.validation_error import DocumentRejectedError, raise_for_errors
from ..pipeline.parser import parse, validate_document
from ..pipeline.serializer import render

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Raised when a command cannot run (missing file, bad profile)."""
    pass


def read_document_text(path: str) -> str:
    """Read a payment document payload from a text file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise CLIError(f"Input file not found: {path}")
    return file_path.read_text(encoding="utf-8")


def validate_file(path: str, strict: bool = True) -> int:
    """Validate one document file and report every error.

    Returns:
        Exit code: 0 if valid (or lenient), 1 if strict and errors were found
    """
    result = parse(read_document_text(path))
    if result.is_valid:
        print(f"{path}: OK")
        return 0

    for error in result.errors:
        print(f"{path}: {error}")
    print(f"{path}: {len(result.errors)} error(s)")
    return 1 if strict else 0


def render_file(path: str) -> str:
    """Parse a document file and return its canonical text."""
    result = parse(read_document_text(path))
    for error in result.errors:
        logger.warning(f"{path}: {error}")
    return render(result.document)


def generate_document(
    profile_name: str,
    amount: Optional[str] = None,
    reference_type: Optional[str] = None,
    reference: Optional[str] = None,
    due_date: Optional[str] = None,
    profiles_dir: Optional[str] = None,
) -> str:
    """Build a document from a bill profile and return its text.

    Raises:
        CLIError: If the profile cannot be loaded
        DocumentRejectedError: If the generated document is not valid
    """
    try:
        profile = load_profile(profile_name, Path(profiles_dir) if profiles_dir else None)
    except (FileNotFoundError, ValueError) as e:
        raise CLIError(str(e)) from e

    try:
        document = profile.build_document(
            amount=amount,
            reference=reference,
            reference_type=reference_type,
            due_date=due_date,
        )
    except ValueError as e:
        raise CLIError(f"Profile {profile_name}: {e}") from e

    raise_for_errors(validate_document(document))
    return render(document)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qrbill",
        description=f"{get_app_name()} - validate and generate QR bill payment documents"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_app_version()}"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Validate payment document files")
    validate_parser.add_argument("files", nargs="+", help="Text files holding one payment document each")
    strict_group = validate_parser.add_mutually_exclusive_group()
    strict_group.add_argument(
        "--strict",
        dest="strict",
        action="store_true",
        default=None,
        help="Exit with error code if any document has errors (default: QRBILL_STRICT)"
    )
    strict_group.add_argument(
        "--lenient",
        dest="strict",
        action="store_false",
        help="Report errors but exit with 0"
    )

    render_parser = subparsers.add_parser("render", help="Print the canonical form of a payment document")
    render_parser.add_argument("file", help="Text file holding one payment document")

    generate_parser = subparsers.add_parser("generate", help="Generate a payment document from a bill profile")
    generate_parser.add_argument("--profile", default="default", help="Bill profile name (default: default)")
    generate_parser.add_argument("--profiles-dir", help="Directory holding bill profiles")
    generate_parser.add_argument("--amount", help="Amount payable (omit for an open amount)")
    generate_parser.add_argument("--reference-type", help="QRR, SCOR or NON (default: from profile)")
    generate_parser.add_argument("--reference", help="Payment reference")
    generate_parser.add_argument("--due-date", help="Due date YYYY-MM-DD (format version 1.x only)")
    generate_parser.add_argument("--output", help="Write the payload to this file instead of stdout")

    subparsers.add_parser("profiles", help="List available bill profiles")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_log_level(),
        format="%(message)s"
    )

    try:
        if args.command == "validate":
            strict = get_strict_mode() if args.strict is None else args.strict
            exit_code = 0
            for path in args.files:
                exit_code = max(exit_code, validate_file(path, strict=strict))
            return exit_code

        if args.command == "render":
            print(render_file(args.file))
            return 0

        if args.command == "generate":
            payload = generate_document(
                args.profile,
                amount=args.amount,
                reference_type=args.reference_type,
                reference=args.reference,
                due_date=args.due_date,
                profiles_dir=args.profiles_dir,
            )
            if args.output:
                Path(args.output).write_text(payload, encoding="utf-8")
                print(f"Payment document written to {args.output}")
            else:
                print(payload)
            return 0

        if args.command == "profiles":
            for name in list_available_profiles():
                print(name)
            return 0

    except DocumentRejectedError as e:
        for error in e.errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1
    except CLIError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
