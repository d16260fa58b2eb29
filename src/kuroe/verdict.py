"""
Verdict Termination

The early-exit primitives used by validators and checkers. A verdict is
raised as ``VerdictExit`` from any depth and turned into an exit status
by the runner, so programs stay testable in-process.
"""

from typing import Any, NoReturn

from .main import Verdict


class VerdictExit(Exception):
    """Terminates a run with a verdict and a message"""

    def __init__(self, verdict: Verdict, message: str = ""):
        super().__init__(f"{verdict.label} {message}".rstrip())
        self.verdict = verdict
        self.message = message


def _format(message: str, args: tuple) -> str:
    return message % args if args else message


def quit_with(verdict: Verdict, message: str = "", *args: Any) -> NoReturn:
    """Stop the run immediately with ``verdict``"""
    raise VerdictExit(verdict, _format(message, args))


def ensure(condition: Any, message: str, *args: Any) -> None:
    """
    Assert a judge-side condition.

    A false condition means the test data or the reference answer breaks
    its contract, so the run ends with FAIL.
    """
    if not condition:
        raise VerdictExit(Verdict.FAIL, _format(message, args))


def expect(condition: Any, message: str, *args: Any) -> None:
    """Assert a contestant-side condition; failure is WRONG_ANSWER"""
    if not condition:
        raise VerdictExit(Verdict.WRONG_ANSWER, _format(message, args))
