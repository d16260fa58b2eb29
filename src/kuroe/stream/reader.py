"""
Token Stream Reader

Forward-only reader over one text file. Validators open their input in
strict mode, checkers open all three files in lax mode.

Every failed read ends the run through ``VerdictExit``. Who is blamed
depends on the stream role:

- input and answer streams always fail with FAIL (judge-side data)
- the output stream fails with WRONG_ANSWER for wrong values,
  PRESENTATION_ERROR for malformed values and the configured verdict
  for a premature end of file
"""

import logging
import re
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, Pattern, TextIO, Union

from ..main import StreamRole, Verdict
from ..verdict import VerdictExit

logger = logging.getLogger(__name__)

WHITESPACE = " \t\r\n"

INT_RE = re.compile(r"-?(0|[1-9][0-9]*)")
STRICT_FLOAT_RE = re.compile(r"-?(0|[1-9][0-9]*)(\.[0-9]+)?")
FLOAT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

Number = Union[int, float]


def _bound(value: Optional[Number], missing: str) -> str:
    return missing if value is None else str(value)


class TokenStream:
    """
    Positioned, forward-only reader over structured text.

    Strict mode (validators):
    - no implicit whitespace skipping
    - ``read_eoln`` needs exactly ``\\n``
    - ``read_eof`` needs the cursor at the very end

    Lax mode (checkers):
    - tokens skip leading whitespace
    - a final line may end without ``\\n``
    - ``read_line`` treats ``\\r\\n`` as a line end
    - ``read_eof`` ignores trailing whitespace
    """

    def __init__(
        self,
        text: str,
        role: StreamRole = StreamRole.INPUT,
        strict: bool = False,
        name: Optional[str] = None,
        eof_verdict: Verdict = Verdict.WRONG_ANSWER,
    ):
        self._text = text
        self._pos = 0
        self._line = 1
        self._eof_confirmed = False
        self.role = role
        self.strict = strict
        self.name = name or role.value
        self.eof_verdict = eof_verdict

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        role: StreamRole = StreamRole.INPUT,
        strict: bool = False,
        encoding: str = "utf-8",
        eof_verdict: Verdict = Verdict.WRONG_ANSWER,
    ) -> "TokenStream":
        """Open a stream over a file, keeping line endings untouched"""
        with open(path, "r", encoding=encoding, newline="") as f:
            text = f.read()
        return cls(text, role=role, strict=strict, name=str(path), eof_verdict=eof_verdict)

    @classmethod
    def from_file(
        cls,
        fileobj: Union[TextIO, BinaryIO],
        role: StreamRole = StreamRole.INPUT,
        strict: bool = False,
        encoding: str = "utf-8",
        eof_verdict: Verdict = Verdict.WRONG_ANSWER,
        name: Optional[str] = None,
    ) -> "TokenStream":
        """Open a stream over an already open file object (e.g. stdin)"""
        data = fileobj.read()
        if isinstance(data, bytes):
            data = data.decode(encoding)
        name = name or getattr(fileobj, "name", None) or role.value
        return cls(data, role=role, strict=strict, name=str(name), eof_verdict=eof_verdict)

    # =========================================================================
    # Position
    # =========================================================================

    @property
    def line_number(self) -> int:
        """1-based line of the cursor"""
        return self._line

    def eof(self) -> bool:
        """Check if the cursor is at the end of the stream"""
        return self._pos >= len(self._text)

    def seek_eof(self) -> bool:
        """Skip whitespace and check for the end of the stream"""
        self._skip(WHITESPACE)
        return self.eof()

    def eoln(self) -> bool:
        """Check if the next character ends the line"""
        if self.strict:
            return self._peek() == "\n"
        pos = self._pos
        while pos < len(self._text) and self._text[pos] in " \t\r":
            pos += 1
        return pos >= len(self._text) or self._text[pos] == "\n"

    # =========================================================================
    # Reads
    # =========================================================================

    def read_char(self) -> str:
        self._check_open()
        if self.eof():
            self._unexpected_eof("character")
        char = self._peek()
        self._advance(1)
        return char

    def read_space(self) -> None:
        self._check_open()
        if self.eof():
            self._unexpected_eof("space")
        if self._peek() != " ":
            self._format_error(f"Expected space, found {self._peek()!r}")
        self._advance(1)

    def read_eoln(self) -> None:
        self._check_open()
        if not self.strict:
            self._skip(" \t\r")
            if self.eof():
                return
        if self.eof():
            self._unexpected_eof("end of line")
        if self._peek() != "\n":
            self._format_error(f"Expected end of line, found {self._peek()!r}")
        self._advance(1)

    def read_eof(self) -> None:
        """
        Confirm that nothing is left to read.

        Once confirmed, any further read is a programming error and ends
        the run with FAIL. Calling read_eof again is harmless.
        """
        if self._eof_confirmed:
            return
        if not self.strict:
            self._skip(WHITESPACE)
        if not self.eof():
            self._format_error("Expected end of file, found extra data")
        self._eof_confirmed = True

    def read_token(
        self,
        pattern: Optional[Union[str, Pattern]] = None,
        name: str = "token",
    ) -> str:
        """Read a maximal run of non-whitespace characters"""
        self._check_open()
        if not self.strict:
            self._skip(WHITESPACE)
        if self.eof():
            self._unexpected_eof(name)

        end = self._pos
        while end < len(self._text) and self._text[end] not in WHITESPACE:
            end += 1
        if end == self._pos:
            self._format_error(f"Expected {name}, found {self._peek()!r}")

        token = self._text[self._pos:end]
        self._advance(end - self._pos)
        self._match(token, pattern, name)
        return token

    read_word = read_token

    def read_line(
        self,
        pattern: Optional[Union[str, Pattern]] = None,
        name: str = "line",
    ) -> str:
        """Read up to and including the next newline; return it without the newline"""
        self._check_open()
        if self.eof():
            self._unexpected_eof(name)

        end = self._text.find("\n", self._pos)
        if end == -1:
            if self.strict:
                self._advance(len(self._text) - self._pos)
                self._format_error(f"Expected end of line after {name}")
            line = self._text[self._pos:]
            self._advance(len(line))
        else:
            line = self._text[self._pos:end]
            self._advance(end - self._pos + 1)

        if not self.strict and line.endswith("\r"):
            line = line[:-1]

        self._match(line, pattern, name)
        return line

    def read_lines(
        self,
        count: int,
        pattern: Optional[Union[str, Pattern]] = None,
        name: str = "line",
    ) -> List[str]:
        return [self.read_line(pattern, f"{name}[{i + 1}]") for i in range(count)]

    def read_int(
        self,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
        name: str = "integer",
    ) -> int:
        """Read an integer without sign-less zeros or leading zeros"""
        token = self.read_token(name=name)
        if not INT_RE.fullmatch(token) or token == "-0":
            self._format_error(f"Expected {name}, found {token!r}")
        value = int(token)
        self._check_range(value, min_value, max_value, name)
        return value

    def read_ints(
        self,
        count: int,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
        name: str = "integer",
    ) -> List[int]:
        """Read ``count`` integers, single-space separated in strict mode"""
        values = []
        for i in range(count):
            if i and self.strict:
                self.read_space()
            values.append(self.read_int(min_value, max_value, f"{name}[{i + 1}]"))
        return values

    def read_float(
        self,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        name: str = "number",
    ) -> float:
        """Read a decimal number; strict mode rejects exponents"""
        token = self.read_token(name=name)
        regex = STRICT_FLOAT_RE if self.strict else FLOAT_RE
        if not regex.fullmatch(token):
            self._format_error(f"Expected {name}, found {token!r}")
        value = float(token)
        self._check_range(value, min_value, max_value, name)
        return value

    # =========================================================================
    # Assertions
    # =========================================================================

    def ensure(self, condition: Any, message: str, *args: Any) -> None:
        """
        Assert a condition about data read from this stream.

        On the output stream a false condition is WRONG_ANSWER; on the
        input and answer streams it is FAIL.
        """
        if not condition:
            self.quit_with(Verdict.WRONG_ANSWER, message, *args)

    def quit_with(self, verdict: Verdict, message: str, *args: Any) -> None:
        """End the run, attributing ``verdict`` to this stream"""
        self._fail(verdict, message % args if args else message)

    # =========================================================================
    # Internals
    # =========================================================================

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _advance(self, count: int) -> None:
        chunk = self._text[self._pos:self._pos + count]
        self._line += chunk.count("\n")
        self._pos += len(chunk)

    def _skip(self, chars: str) -> None:
        start = self._pos
        while self._pos < len(self._text) and self._text[self._pos] in chars:
            self._pos += 1
        self._line += self._text.count("\n", start, self._pos)

    def _check_open(self) -> None:
        if self._eof_confirmed:
            raise VerdictExit(
                Verdict.FAIL,
                f"Read requested after end of file was confirmed ({self._where()})",
            )

    def _match(self, value: str, pattern: Optional[Union[str, Pattern]], name: str) -> None:
        if pattern is None:
            return
        if not re.fullmatch(pattern, value):
            shown = pattern.pattern if hasattr(pattern, "pattern") else pattern
            self._fail(
                Verdict.WRONG_ANSWER,
                f"{name} {value!r} doesn't match pattern {shown!r}",
            )

    def _check_range(
        self,
        value: Number,
        min_value: Optional[Number],
        max_value: Optional[Number],
        name: str,
    ) -> None:
        if (min_value is not None and value < min_value) or (
            max_value is not None and value > max_value
        ):
            self._fail(
                Verdict.WRONG_ANSWER,
                f"{name} {value} violates the range "
                f"[{_bound(min_value, '-inf')}, {_bound(max_value, 'inf')}]",
            )

    def _where(self) -> str:
        return f"{self.name}, line {self._line}"

    def _format_error(self, message: str) -> None:
        self._fail(Verdict.PRESENTATION_ERROR, message)

    def _unexpected_eof(self, what: str) -> None:
        self._fail(self.eof_verdict, f"Unexpected end of file - {what} expected")

    def _fail(self, output_verdict: Verdict, message: str) -> None:
        verdict = output_verdict if self.role is StreamRole.OUTPUT else Verdict.FAIL
        logger.debug(f"{verdict.name} {message}", extra={"stream": f"{self.role.value}:{self.name}"})
        raise VerdictExit(verdict, f"{message} ({self._where()})")
