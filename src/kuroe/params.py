"""
Program Parameters

Auxiliary NAME=VALUE arguments handed to validators and checkers
(for example the bounds a validator should enforce).
"""

from typing import Dict, Iterable, Iterator, Mapping, Optional

from .main import Verdict
from .verdict import quit_with

_MISSING = object()


class Params(Mapping):
    """Read-only parameter mapping; bad parameters are judge-side errors"""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})

    @classmethod
    def parse(cls, pairs: Iterable[str]) -> "Params":
        """Build from ``NAME=VALUE`` strings"""
        values = {}
        for pair in pairs:
            name, sep, value = pair.partition("=")
            if not sep or not name.strip():
                quit_with(Verdict.FAIL, "Malformed parameter %r, expected NAME=VALUE", pair)
            values[name.strip()] = value
        return cls(values)

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Params({self._values!r})"

    def get_str(self, name: str, default=_MISSING) -> str:
        if name in self._values:
            return self._values[name]
        if default is _MISSING:
            quit_with(Verdict.FAIL, "Missing required parameter %r", name)
        return default

    def get_int(self, name: str, default=_MISSING) -> int:
        if name not in self._values:
            return self.get_str(name, default)
        try:
            return int(self._values[name])
        except ValueError:
            quit_with(Verdict.FAIL, "Parameter %r must be an integer, got %r", name, self._values[name])

    def get_float(self, name: str, default=_MISSING) -> float:
        if name not in self._values:
            return self.get_str(name, default)
        try:
            return float(self._values[name])
        except ValueError:
            quit_with(Verdict.FAIL, "Parameter %r must be a number, got %r", name, self._values[name])
