"""
kuroe - Validation and Checking for Judge Test Data

Format-aware token streams, fail-fast input validators and output
checkers that report one verdict per run:

1. A validator reads a candidate input through a strict stream and ends
   with FAIL at the first broken constraint or unread trailing data
2. A checker reads input, contestant output and reference answer and
   ends with OK, WRONG_ANSWER, PRESENTATION_ERROR or FAIL
3. FAIL always means a judge-side defect and is never blamed on the
   contestant
"""

__version__ = "0.3.0"

from .main import KuroeConfig, StreamRole, Verdict
from .params import Params
from .program import Program, checker_program, validation_program
from .stream import TokenStream
from .verdict import VerdictExit, ensure, expect, quit_with
from .verification import (
    Checker,
    FloatChecker,
    FunctionChecker,
    FunctionValidator,
    IntegerListValidator,
    IntegerSequenceChecker,
    LineChecker,
    LinesChecker,
    PrefixValidator,
    ProgramRunner,
    RunOutcome,
    TokenChecker,
    Validator,
    YesNoChecker,
    get_checker,
    get_validator,
)

__all__ = [
    # Types
    "Verdict",
    "StreamRole",
    "KuroeConfig",
    "Params",
    # Streams and termination
    "TokenStream",
    "VerdictExit",
    "quit_with",
    "ensure",
    "expect",
    # Programs
    "Program",
    "validation_program",
    "checker_program",
    "ProgramRunner",
    "RunOutcome",
    # Validators
    "Validator",
    "PrefixValidator",
    "IntegerListValidator",
    "FunctionValidator",
    "get_validator",
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
    # Meta
    "__version__",
]
