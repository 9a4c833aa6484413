"""Command-line interface for js-constraint-extractor."""

import argparse
import logging
import sys
from pathlib import Path

from js_constraint_extractor.extractor import ConstraintExtractor
from js_constraint_extractor.models import result_to_json
from js_constraint_extractor.source_loader import SourceLoadError

logger = logging.getLogger(__name__)

COMMANDS = ("extract",)


def setup_logging(verbosity: int = 0):
    """Configure logging to stderr."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="js-constraint-extractor",
        description="Derive boundary-value constraints for JavaScript function parameters",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # extract subcommand
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract parameter constraints from a JavaScript file (default)",
    )
    extract_parser.add_argument(
        "subject",
        help="JavaScript file to analyze",
    )
    extract_parser.add_argument(
        "--output",
        "-o",
        help="Write JSON to this file instead of stdout",
    )
    extract_parser.add_argument(
        "--function",
        "-f",
        action="append",
        dest="functions",
        metavar="NAME",
        help="Only report this function (repeatable)",
    )
    extract_parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Seed for generated values (default: random)",
    )
    extract_parser.add_argument(
        "--tolerant",
        action="store_true",
        help="Extract from files with recoverable syntax errors",
    )
    extract_parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output)",
    )

    return parser


def parse_args(args: list[str]) -> argparse.Namespace:
    """Parse command-line arguments, defaulting to the extract command."""
    parser = create_parser()

    # A bare subject path means 'extract'
    if args and not args[0].startswith("-") and args[0] not in COMMANDS:
        args = ["extract"] + args

    return parser.parse_args(args)


def run_extract(
    subject: str,
    output: str | None = None,
    functions: list[str] | None = None,
    seed: int | None = None,
    tolerant: bool = False,
) -> int:
    """Run the extract command.

    Args:
        subject: Path to the JavaScript file
        output: Output path for the JSON result, or None for stdout
        functions: Function names to keep, or None for all
        seed: Seed for generated values
        tolerant: Accept recoverable syntax errors

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    logger.info(f"Extracting constraints from: {subject}")
    extractor = ConstraintExtractor(seed=seed, tolerant=tolerant)

    try:
        result = extractor.extract(subject)
    except SourceLoadError as e:
        logger.error(f"Extraction failed during {e.phase}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if functions:
        missing = [name for name in functions if name not in result]
        for name in missing:
            logger.warning(f"Function not found in {subject}: {name}")
        result = {name: record for name, record in result.items() if name in functions}

    content = result_to_json(result)

    if output:
        Path(output).write_text(content + "\n")
        logger.info(f"Constraints written to {output}")
        print(
            f"Extracted constraints for {len(result)} functions. Written to: {output}",
            file=sys.stderr,
        )
    else:
        print(content)

    return 0


def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for fatal errors)
    """
    try:
        parsed = parse_args(args)
    except SystemExit as e:
        return e.code if e.code is not None else 1

    if parsed.command is None:
        # No command and no args - show help
        create_parser().print_help(sys.stderr)
        return 1

    setup_logging(parsed.verbose)

    if parsed.command == "extract":
        return run_extract(
            parsed.subject,
            output=parsed.output,
            functions=parsed.functions,
            seed=parsed.seed,
            tolerant=parsed.tolerant,
        )

    return 1


def main():
    """Entry point for the CLI."""
    exit_code = run_cli(sys.argv[1:])
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
