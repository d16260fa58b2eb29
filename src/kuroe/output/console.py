"""
Console Output Formatter

Writes the verdict line to the report channel.
"""

import sys
from typing import List, Optional, TextIO

from .base import BaseFormatter, OutputLevel
from ..main import Verdict
from ..verification.runner import RunOutcome


class ConsoleFormatter(BaseFormatter):
    """
    Console formatter with colored verdicts.

    Uses ANSI escape codes when the report stream is a terminal and
    falls back to plain text otherwise, so report files stay parseable.
    The verdict line is written at every level, QUIET included.
    """

    # ANSI color codes
    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "dim": "\033[2m",
        "green": "\033[32m",
        "yellow": "\033[33m",
        "red": "\033[31m",
        "magenta": "\033[35m",
    }

    VERDICT_COLORS = {
        Verdict.OK: "green",
        Verdict.WRONG_ANSWER: "red",
        Verdict.PRESENTATION_ERROR: "yellow",
        Verdict.FAIL: "magenta",
    }

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        level: OutputLevel = OutputLevel.NORMAL,
        use_colors: bool = True,
    ):
        super().__init__(level)
        self.stream = stream if stream is not None else sys.stderr
        isatty = getattr(self.stream, "isatty", None)
        self.use_colors = use_colors and bool(isatty and isatty())

    def _c(self, color: str, text: str) -> str:
        """Apply color to text"""
        if self.use_colors:
            return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"
        return text

    def report(self, outcome: RunOutcome) -> None:
        """Write exactly one line: verdict word and message"""
        line = outcome.report_line()
        label = outcome.verdict.label
        line = self._c(self.VERDICT_COLORS[outcome.verdict], label) + line[len(label):]

        if self.level >= OutputLevel.VERBOSE:
            line += self._c("dim", f" [{outcome.program}, {outcome.duration_ms}ms]")

        print(line, file=self.stream)
        self.stream.flush()

    def listing(self, title: str, names: List[str]) -> None:
        """Print a titled list of names"""
        print(self._c("bold", f"{title}:"), file=self.stream)
        for name in names:
            print(f"  {name}", file=self.stream)
