"""
Output Checkers

A checker decides the verdict for one (input, output, answer) triple.
The reference answer is ground truth: anything wrong with it is a
judge-side defect and ends in FAIL, never WRONG_ANSWER.

Checkers return an OK message on success and raise VerdictExit
otherwise. Trailing content in the output is policed by the runner.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Type

from ..main import KuroeConfig, Verdict
from ..params import Params
from ..stream import TokenStream
from ..verdict import quit_with

logger = logging.getLogger(__name__)


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _compress(text: str, limit: int = 64) -> str:
    """Shorten long values for the single report line"""
    if len(text) <= limit:
        return text
    half = (limit - 3) // 2
    return f"{text[:half]}...{text[-half:]}"


class Checker(ABC):
    """Base class for output checkers"""

    name: str = "base"

    def check(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        """
        Check contestant output against the reference answer.

        Args:
            inf: Lax stream over the test input (may be left unread)
            ouf: Lax stream over the contestant output
            ans: Lax stream over the reference answer

        Returns:
            Message reported together with OK

        Raises:
            VerdictExit: for any other verdict
        """
        return self._check_impl(inf, ouf, ans)

    @abstractmethod
    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        """Implementation of the comparison"""
        pass

    @classmethod
    def from_config(cls, config: KuroeConfig, params: Params) -> "Checker":
        return cls()


class LineChecker(Checker):
    """Compares the first line of output and answer byte for byte"""

    name = "line"

    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        answer = ans.read_line()
        output = ouf.read_line()

        if output != answer:
            quit_with(
                Verdict.WRONG_ANSWER,
                "expected '%s', found '%s'",
                _compress(answer),
                _compress(output),
            )
        return "ok"


class LinesChecker(Checker):
    """Compares every line of the answer with the matching output line"""

    name = "lines"

    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        answers = []
        while not ans.eof():
            answers.append(ans.read_line())
        # trailing blank answer lines are not required from the output
        while answers and not answers[-1].strip():
            answers.pop()

        count = 0
        for answer in answers:
            count += 1
            if ouf.eof():
                quit_with(Verdict.WRONG_ANSWER, "output ended before %s line", _ordinal(count))
            output = ouf.read_line()
            if output != answer:
                quit_with(
                    Verdict.WRONG_ANSWER,
                    "%s line differs - expected '%s', found '%s'",
                    _ordinal(count),
                    _compress(answer),
                    _compress(output),
                )

        return f"{count} line(s)"


class TokenChecker(Checker):
    """Compares whitespace-separated tokens"""

    name = "tokens"

    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        count = 0
        while not ans.seek_eof():
            count += 1
            answer = ans.read_token()
            if ouf.seek_eof():
                quit_with(
                    Verdict.WRONG_ANSWER,
                    "answer contains more tokens than output - expected '%s' as %s token",
                    _compress(answer),
                    _ordinal(count),
                )
            output = ouf.read_token()
            if output != answer:
                quit_with(
                    Verdict.WRONG_ANSWER,
                    "%s token differs - expected '%s', found '%s'",
                    _ordinal(count),
                    _compress(answer),
                    _compress(output),
                )

        return f"{count} token(s)"


class IntegerSequenceChecker(Checker):
    """Compares sequences of integers"""

    name = "ints"

    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        count = 0
        first: List[int] = []
        while not ans.seek_eof():
            count += 1
            answer = ans.read_int(name=f"{_ordinal(count)} answer number")
            if ouf.seek_eof():
                quit_with(
                    Verdict.WRONG_ANSWER,
                    "answer contains more numbers than output (expected %d as %s number)",
                    answer,
                    _ordinal(count),
                )
            output = ouf.read_int(name=f"{_ordinal(count)} number")
            if output != answer:
                quit_with(
                    Verdict.WRONG_ANSWER,
                    "%s numbers differ - expected %d, found %d",
                    _ordinal(count),
                    answer,
                    output,
                )
            if len(first) < 5:
                first.append(answer)

        if count <= 5:
            return f"{count} number(s): \"{' '.join(map(str, first))}\""
        return f"{count} numbers"


class FloatChecker(Checker):
    """
    Compares sequences of real numbers.

    An output value is accepted when it is within the absolute OR the
    relative tolerance of the answer value.
    """

    name = "floats"

    def __init__(self, abs_tolerance: float = 1e-6, rel_tolerance: float = 1e-6):
        self.abs_tolerance = abs_tolerance
        self.rel_tolerance = rel_tolerance

    @classmethod
    def from_config(cls, config: KuroeConfig, params: Params) -> "FloatChecker":
        return cls(
            abs_tolerance=params.get_float("abs_tolerance", config.float_abs_tolerance),
            rel_tolerance=params.get_float("rel_tolerance", config.float_rel_tolerance),
        )

    def close_enough(self, expected: float, found: float) -> bool:
        if math.isinf(expected) or math.isnan(expected):
            return expected == found
        diff = abs(expected - found)
        return diff <= self.abs_tolerance or diff <= self.rel_tolerance * abs(expected)

    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        count = 0
        while not ans.seek_eof():
            count += 1
            answer = ans.read_float(name=f"{_ordinal(count)} answer number")
            if ouf.seek_eof():
                quit_with(
                    Verdict.WRONG_ANSWER,
                    "answer contains more numbers than output (expected %s as %s number)",
                    answer,
                    _ordinal(count),
                )
            output = ouf.read_float(name=f"{_ordinal(count)} number")
            if not self.close_enough(answer, output):
                quit_with(
                    Verdict.WRONG_ANSWER,
                    "%s numbers differ - expected %.10g, found %.10g, error %.3g",
                    _ordinal(count),
                    answer,
                    output,
                    abs(answer - output),
                )

        return f"{count} number(s) within tolerance"


class YesNoChecker(Checker):
    """Compares a single case-insensitive YES/NO token"""

    name = "yesno"

    ACCEPTED = ("YES", "NO")

    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        answer = ans.read_token().upper()
        if answer not in self.ACCEPTED:
            ans.quit_with(Verdict.FAIL, "expected YES or NO in answer, found '%s'", _compress(answer))

        output = ouf.read_token().upper()
        if output not in self.ACCEPTED:
            ouf.quit_with(
                Verdict.PRESENTATION_ERROR,
                "expected YES or NO, found '%s'",
                _compress(output),
            )

        if output != answer:
            quit_with(Verdict.WRONG_ANSWER, "expected %s, found %s", answer, output)
        return f"answer is {answer}"


class FunctionChecker(Checker):
    """Adapts a plain ``fn(inf, ouf, ans, params)`` function to the Checker interface"""

    def __init__(
        self,
        fn: Callable[[TokenStream, TokenStream, TokenStream, Params], Optional[str]],
        params: Optional[Params] = None,
        name: Optional[str] = None,
    ):
        self.fn = fn
        self.params = params if params is not None else Params()
        self.name = name or getattr(fn, "__name__", "function")

    def _check_impl(self, inf: TokenStream, ouf: TokenStream, ans: TokenStream) -> str:
        message = self.fn(inf, ouf, ans, self.params)
        return message if message is not None else "ok"


CHECKERS: Dict[str, Type[Checker]] = {
    LineChecker.name: LineChecker,
    LinesChecker.name: LinesChecker,
    TokenChecker.name: TokenChecker,
    IntegerSequenceChecker.name: IntegerSequenceChecker,
    FloatChecker.name: FloatChecker,
    YesNoChecker.name: YesNoChecker,
}


def get_checker(
    name: str,
    config: Optional[KuroeConfig] = None,
    params: Optional[Params] = None,
) -> Checker:
    """Build a built-in checker by name"""
    if name not in CHECKERS:
        raise KeyError(f"Unknown checker: {name} (available: {', '.join(list_checkers())})")
    return CHECKERS[name].from_config(
        config or KuroeConfig(),
        params if params is not None else Params(),
    )


def list_checkers() -> List[str]:
    return sorted(CHECKERS)
