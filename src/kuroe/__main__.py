"""
kuroe CLI

Command-line interface for the built-in validators and checkers.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .logging_config import setup_logging
from .main import DEFAULT_CONFIG_TEMPLATE, KuroeConfig
from .output.console import ConsoleFormatter, OutputLevel
from .params import Params
from .program import load_config, setup_failure, write_report
from .verdict import VerdictExit
from .verification import (
    ProgramRunner,
    get_checker,
    get_validator,
    list_checkers,
    list_validators,
)


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="kuroe",
        description="kuroe - test input validation and output checking",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a test input")
    validate_parser.add_argument("input", nargs="?", help="Candidate input (default: stdin)")
    validate_parser.add_argument(
        "--validator",
        default="prefix",
        help="Built-in validator to use",
    )
    validate_parser.add_argument(
        "--param", "-p",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Validator parameter",
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check an output against the answer")
    check_parser.add_argument("input", help="Test input")
    check_parser.add_argument("output", help="Contestant output")
    check_parser.add_argument("answer", help="Reference answer")
    check_parser.add_argument(
        "--checker",
        default="line",
        help="Built-in checker to use",
    )
    check_parser.add_argument(
        "--param", "-p",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Checker parameter",
    )

    # List command
    subparsers.add_parser("list", help="List built-in validators and checkers")

    # Config command
    config_parser = subparsers.add_parser("config", help="Show/create configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--init", action="store_true", help="Initialize config file")

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase verbosity",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet mode",
    )
    parser.add_argument(
        "--log-file",
        help="Log to file",
    )
    parser.add_argument(
        "--config",
        help="Config file path",
    )
    parser.add_argument(
        "--report",
        help="Write the verdict line to this file",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    return parser.parse_args(argv)


def run_program(args: argparse.Namespace, config: KuroeConfig, level: OutputLevel) -> int:
    """Run a built-in validator or checker and report its verdict"""
    runner = ProgramRunner(config)
    name = args.validator if args.command == "validate" else args.checker

    try:
        params = Params.parse(args.param)
        if args.command == "validate":
            program = get_validator(args.validator, params)
        else:
            program = get_checker(args.checker, config, params)
    except (KeyError, VerdictExit) as e:
        error = ValueError(e.args[0]) if isinstance(e, KeyError) else e
        outcome = setup_failure(name, error)
        return write_report(outcome, config, args.report, level=level, use_colors=not args.no_color)

    if args.command == "validate":
        source = args.input if args.input else sys.stdin.buffer
        outcome = runner.validate(program, source)
    else:
        outcome = runner.check(program, args.input, args.output, args.answer)

    return write_report(outcome, config, args.report, level=level, use_colors=not args.no_color)


def show_programs(formatter: ConsoleFormatter) -> int:
    """List built-in programs"""
    formatter.listing("Validators", list_validators())
    formatter.listing("Checkers", list_checkers())
    return 0


def show_config(args: argparse.Namespace, config: KuroeConfig) -> int:
    """Show or initialize configuration"""
    if args.init:
        config_path = Path(args.config or "kuroe.yml")
        if config_path.exists():
            print(f"Config already exists: {config_path}")
            return 1

        config_path.write_text(DEFAULT_CONFIG_TEMPLATE)
        print(f"Created config: {config_path}")
        return 0

    if args.show:
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)

    try:
        config = load_config(None if args.command == "config" and args.init else args.config)
    except (OSError, ValueError) as e:
        setup_logging(level="WARNING", log_file=args.log_file, use_colors=not args.no_color)
        if args.command in ("validate", "check"):
            outcome = setup_failure(args.command, e)
            return write_report(outcome, KuroeConfig(), args.report, use_colors=not args.no_color)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Set up logging
    log_level = "DEBUG" if args.verbose >= 2 else ("INFO" if args.verbose >= 1 else config.log_level)
    if args.quiet:
        log_level = "ERROR"

    setup_logging(
        level=log_level,
        log_file=args.log_file,
        use_colors=not args.no_color,
    )

    output_level = OutputLevel.DEBUG if args.verbose >= 2 else (
        OutputLevel.VERBOSE if args.verbose >= 1 else (
            OutputLevel.QUIET if args.quiet else OutputLevel.NORMAL
        )
    )

    # Execute command
    if args.command in ("validate", "check"):
        return run_program(args, config, output_level)
    elif args.command == "list":
        return show_programs(ConsoleFormatter(stream=sys.stdout, use_colors=not args.no_color))
    elif args.command == "config":
        return show_config(args, config)
    else:
        print("Use --help for usage information")
        return 1


if __name__ == "__main__":
    sys.exit(main())
