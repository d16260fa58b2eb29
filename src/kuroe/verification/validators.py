"""
Input Validators

Validators check a candidate test input against its format contract
before it is handed to any solution. Assertions run in order and the
first failure ends the run with FAIL; nothing is accumulated.

Every validator finishes with a strict end-of-file check, so a generator
that writes extra trailing data never slips through.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Type

from ..params import Params
from ..stream import TokenStream
from ..verdict import ensure

logger = logging.getLogger(__name__)


class Validator(ABC):
    """Base class for input validators"""

    name: str = "base"

    def validate(self, inf: TokenStream) -> None:
        """
        Validate one input stream.

        Args:
            inf: Strict stream over the candidate input

        Raises:
            VerdictExit: with FAIL on the first violated constraint
        """
        self._validate_impl(inf)
        inf.read_eof()
        logger.debug(f"Validator {self.name} accepted {inf.name}")

    @abstractmethod
    def _validate_impl(self, inf: TokenStream) -> None:
        """Implementation of the format assertions"""
        pass


class PrefixValidator(Validator):
    """
    Validator for inputs whose single line must start with a literal.

    Accepts exactly one newline-terminated line.
    """

    name = "prefix"

    def __init__(self, prefix: str = "example"):
        self.prefix = prefix

    def _validate_impl(self, inf: TokenStream) -> None:
        line = inf.read_line()
        ensure(
            line.startswith(self.prefix),
            'testcase must start with "%s", got %r (%s, line 1)',
            self.prefix,
            line[:40],
            inf.name,
        )

    @classmethod
    def from_params(cls, params: Params) -> "PrefixValidator":
        return cls(prefix=params.get_str("prefix", "example"))


class IntegerListValidator(Validator):
    """
    Validator for a counted list of bounded integers.

    Format:
        n
        a_1 a_2 ... a_n

    with min_count <= n <= max_count and every a_i in [min_value, max_value].
    """

    name = "int-list"

    def __init__(
        self,
        min_count: int = 1,
        max_count: int = 100000,
        min_value: int = -10**9,
        max_value: int = 10**9,
    ):
        ensure(min_count <= max_count, "min_count %d exceeds max_count %d", min_count, max_count)
        ensure(min_value <= max_value, "min_value %d exceeds max_value %d", min_value, max_value)
        self.min_count = min_count
        self.max_count = max_count
        self.min_value = min_value
        self.max_value = max_value

    def _validate_impl(self, inf: TokenStream) -> None:
        count = inf.read_int(self.min_count, self.max_count, "n")
        inf.read_eoln()
        inf.read_ints(count, self.min_value, self.max_value, "a")
        inf.read_eoln()

    @classmethod
    def from_params(cls, params: Params) -> "IntegerListValidator":
        return cls(
            min_count=params.get_int("min_count", 1),
            max_count=params.get_int("max_count", 100000),
            min_value=params.get_int("min_value", -10**9),
            max_value=params.get_int("max_value", 10**9),
        )


class FunctionValidator(Validator):
    """Adapts a plain ``fn(inf, params)`` function to the Validator interface"""

    def __init__(
        self,
        fn: Callable[[TokenStream, Params], None],
        params: Optional[Params] = None,
        name: Optional[str] = None,
    ):
        self.fn = fn
        self.params = params if params is not None else Params()
        self.name = name or getattr(fn, "__name__", "function")

    def _validate_impl(self, inf: TokenStream) -> None:
        self.fn(inf, self.params)


VALIDATORS: Dict[str, Type[Validator]] = {
    PrefixValidator.name: PrefixValidator,
    IntegerListValidator.name: IntegerListValidator,
}


def get_validator(name: str, params: Optional[Params] = None) -> Validator:
    """Build a built-in validator by name"""
    if name not in VALIDATORS:
        raise KeyError(f"Unknown validator: {name} (available: {', '.join(list_validators())})")
    return VALIDATORS[name].from_params(params if params is not None else Params())


def list_validators() -> List[str]:
    return sorted(VALIDATORS)
