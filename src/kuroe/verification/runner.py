"""
Program Runner

The single dispatch point of kuroe. Validators and checkers raise
VerdictExit from wherever they decide; the runner turns that into a
RunOutcome with an exit code. Nothing else terminates a run.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TextIO, Union

from ..logging_config import ProgramLogger
from ..main import KuroeConfig, StreamRole, Verdict
from ..stream import TokenStream
from ..verdict import VerdictExit
from .checkers import Checker
from .validators import Validator

logger = logging.getLogger(__name__)

Source = Union[str, Path, TextIO]


@dataclass(frozen=True)
class RunOutcome:
    """Complete outcome of one validator or checker run"""
    verdict: Verdict
    message: str = ""
    program: str = ""
    duration_ms: int = 0

    @property
    def exit_code(self) -> int:
        return self.verdict.exit_code

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.OK

    def report_line(self) -> str:
        """The single human-readable line consumed by the harness"""
        message = " ".join(self.message.split())
        return f"{self.verdict.label} {message}".rstrip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "exit_code": self.exit_code,
            "message": self.message,
            "program": self.program,
            "duration_ms": self.duration_ms,
        }


class ProgramRunner:
    """
    Runs validators and checkers and maps every way a run can end to
    exactly one verdict.

    - VerdictExit: its verdict and message
    - a stream that cannot be opened or decoded: FAIL
    - any other exception: FAIL, with the traceback logged
    """

    def __init__(self, config: Optional[KuroeConfig] = None):
        self.config = config or KuroeConfig()

    def validate(self, validator: Validator, source: Source) -> RunOutcome:
        """
        Validate one candidate input.

        Args:
            validator: Validator to apply
            source: Path of the input file or an open file object

        Returns:
            RunOutcome, OK only if every assertion held and the input
            was fully consumed
        """
        def run() -> str:
            inf = self._open(source, StreamRole.INPUT, strict=True)
            try:
                validator.validate(inf)
            except VerdictExit as e:
                if e.verdict is not Verdict.OK:
                    raise
                # an early OK still has to pass the end-of-file check
                inf.read_eof()
            return "input is valid"

        return self._dispatch(validator.name, run)

    def check(
        self,
        checker: Checker,
        input_source: Source,
        output_source: Source,
        answer_source: Source,
    ) -> RunOutcome:
        """
        Check contestant output against the reference answer.

        Args:
            checker: Checker to apply
            input_source: Test input
            output_source: Contestant output
            answer_source: Reference answer

        Returns:
            RunOutcome with the checker verdict
        """
        def run() -> str:
            inf = self._open(input_source, StreamRole.INPUT)
            ans = self._open(answer_source, StreamRole.ANSWER)
            ouf = self._open(output_source, StreamRole.OUTPUT)

            try:
                message = checker.check(inf, ouf, ans)
            except VerdictExit as e:
                if e.verdict is not Verdict.OK:
                    raise
                message = e.message

            if not self.config.allow_trailing_output and not ouf.seek_eof():
                ouf.quit_with(Verdict.PRESENTATION_ERROR, "Extra information in the output file")
            return message

        return self._dispatch(checker.name, run)

    # =========================================================================
    # Internals
    # =========================================================================

    def _open(self, source: Source, role: StreamRole, strict: bool = False) -> TokenStream:
        if isinstance(source, (str, Path)):
            return TokenStream.from_path(
                source,
                role=role,
                strict=strict,
                encoding=self.config.encoding,
                eof_verdict=self.config.eof_verdict,
            )
        return TokenStream.from_file(
            source,
            role=role,
            strict=strict,
            encoding=self.config.encoding,
            eof_verdict=self.config.eof_verdict,
        )

    def _dispatch(self, program: str, run: Callable[[], str]) -> RunOutcome:
        log = ProgramLogger(logger, program)
        start_time = datetime.now()
        verdict = Verdict.FAIL
        message = ""

        log.info(f"Starting {program}")

        try:
            message = run() or ""
            verdict = Verdict.OK

        except VerdictExit as e:
            verdict = e.verdict
            message = e.message

        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Cannot read stream for {program}: {e}")
            message = f"Cannot read stream: {e}"

        except Exception as e:
            log.exception(f"{program} crashed")
            message = f"{program} crashed: {type(e).__name__}: {e}"

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        log.info(f"{program} finished: {verdict.name} in {duration_ms}ms")

        return RunOutcome(
            verdict=verdict,
            message=message,
            program=program,
            duration_ms=duration_ms,
        )
