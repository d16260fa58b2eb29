"""
Program Registration

Turns a plain validator or checker function into a command-line program
that the judging harness can invoke:

    @validation_program
    def main(inf, params):
        ...

    if __name__ == "__main__":
        main()

Validators are called as ``prog [INPUT] [--param NAME=VALUE]...`` and read
stdin when no input is given. Checkers are called as
``prog INPUT OUTPUT ANSWER [REPORT]``. Either way the program writes one
verdict line and exits with the verdict's exit code.
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, List, NoReturn, Optional

import yaml

from .logging_config import get_logger, setup_logging
from .main import KuroeConfig, Verdict
from .output import ConsoleFormatter, OutputLevel
from .params import Params
from .stream import TokenStream
from .verdict import VerdictExit
from .verification import FunctionChecker, FunctionValidator, ProgramRunner, RunOutcome

logger = get_logger("program")


def load_config(path: Optional[str] = None) -> KuroeConfig:
    """Load config from a YAML file, or from the environment when no file is given"""
    if path:
        if not Path(path).exists():
            raise ValueError(f"Config file not found: {path}")
        try:
            return KuroeConfig.from_yaml(path)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    return KuroeConfig.from_env()


def write_report(
    outcome: RunOutcome,
    config: KuroeConfig,
    report_path: Optional[str] = None,
    level: OutputLevel = OutputLevel.NORMAL,
    use_colors: bool = True,
) -> int:
    """
    Write the verdict line to a report file or to the configured channel.

    Returns:
        Exit code of the verdict actually reported. An unwritable report
        file is a setup defect, so FAIL goes to the channel instead.
    """
    if report_path:
        try:
            with open(report_path, "w", encoding="utf-8") as f:
                ConsoleFormatter(stream=f, level=level, use_colors=False).report(outcome)
            return outcome.exit_code
        except OSError as e:
            logger.error(f"Cannot write report {report_path}: {e}")
            outcome = RunOutcome(
                verdict=Verdict.FAIL,
                message=f"Cannot write report {report_path}: {e}",
                program=outcome.program,
                duration_ms=outcome.duration_ms,
            )

    stream = sys.stdout if config.report_channel == "stdout" else sys.stderr
    ConsoleFormatter(stream=stream, level=level, use_colors=use_colors).report(outcome)
    return outcome.exit_code


def setup_failure(program: str, error: Exception) -> RunOutcome:
    """Outcome for a run that could not even be set up"""
    if isinstance(error, VerdictExit):
        return RunOutcome(verdict=error.verdict, message=error.message, program=program)
    return RunOutcome(verdict=Verdict.FAIL, message=f"Invalid setup: {error}", program=program)


class Program:
    """A validator or checker function wired to the command line"""

    VALIDATOR = "validator"
    CHECKER = "checker"

    def __init__(self, fn: Callable, kind: str):
        self.fn = fn
        self.kind = kind
        self.name = getattr(fn, "__name__", kind)
        self.__doc__ = fn.__doc__

    def __call__(self, argv: Optional[List[str]] = None) -> NoReturn:
        sys.exit(self.main(argv))

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command line arguments"""
        parser = argparse.ArgumentParser(description=self.__doc__)

        if self.kind == self.VALIDATOR:
            parser.add_argument("input", nargs="?", help="Candidate input (default: stdin)")
            parser.add_argument("--report", help="Write the verdict line to this file")
        else:
            parser.add_argument("input", help="Test input")
            parser.add_argument("output", help="Contestant output")
            parser.add_argument("answer", help="Reference answer")
            parser.add_argument("report", nargs="?", help="Write the verdict line to this file")

        parser.add_argument(
            "--param", "-p",
            action="append",
            default=[],
            metavar="NAME=VALUE",
            help="Parameter passed to the program",
        )
        parser.add_argument("--config", help="Config file path")
        parser.add_argument(
            "--verbose", "-v",
            action="count",
            default=0,
            help="Increase verbosity",
        )
        parser.add_argument("--log-file", help="Log to file")

        return parser.parse_args(argv)

    def main(self, argv: Optional[List[str]] = None) -> int:
        """Run the program and return the verdict's exit code"""
        args = self.parse_args(argv)

        config = KuroeConfig()
        try:
            config = load_config(args.config)
            params = Params.parse(args.param)
        except (OSError, ValueError, VerdictExit) as e:
            setup_logging(level="WARNING", log_file=args.log_file)
            outcome = setup_failure(self.name, e)
            return write_report(outcome, config, args.report)

        log_level = "DEBUG" if args.verbose >= 2 else ("INFO" if args.verbose >= 1 else config.log_level)
        setup_logging(level=log_level, log_file=args.log_file)
        level = OutputLevel.VERBOSE if args.verbose else OutputLevel.NORMAL

        runner = ProgramRunner(config)
        if self.kind == self.VALIDATOR:
            validator = FunctionValidator(self.fn, params, name=self.name)
            source = args.input if args.input else sys.stdin.buffer
            outcome = runner.validate(validator, source)
        else:
            checker = FunctionChecker(self.fn, params, name=self.name)
            outcome = runner.check(checker, args.input, args.output, args.answer)

        logger.debug(f"Outcome: {outcome.to_dict()}")
        return write_report(outcome, config, args.report, level=level)


def validation_program(fn: Callable[[TokenStream, Params], None]) -> Program:
    """Register ``fn(inf, params)`` as a validator program"""
    return Program(fn, Program.VALIDATOR)


def checker_program(fn: Callable[[TokenStream, TokenStream, TokenStream, Params], Optional[str]]) -> Program:
    """Register ``fn(inf, ouf, ans, params)`` as a checker program"""
    return Program(fn, Program.CHECKER)
