"""
Verification System

Input validators, output checkers and the runner that turns their
decisions into verdicts.
"""

from .checkers import (
    Checker,
    FloatChecker,
    FunctionChecker,
    IntegerSequenceChecker,
    LineChecker,
    LinesChecker,
    TokenChecker,
    YesNoChecker,
    get_checker,
    list_checkers,
)
from .runner import ProgramRunner, RunOutcome
from .validators import (
    FunctionValidator,
    IntegerListValidator,
    PrefixValidator,
    Validator,
    get_validator,
    list_validators,
)

__all__ = [
    # Runner
    "ProgramRunner",
    "RunOutcome",
    # Validators
    "Validator",
    "PrefixValidator",
    "IntegerListValidator",
    "FunctionValidator",
    "get_validator",
    "list_validators",
    # Checkers
    "Checker",
    "LineChecker",
    "LinesChecker",
    "TokenChecker",
    "IntegerSequenceChecker",
    "FloatChecker",
    "YesNoChecker",
    "FunctionChecker",
    "get_checker",
    "list_checkers",
]
