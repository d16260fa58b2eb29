"""
Configuration and Types for kuroe

Verdicts, stream roles and the runtime configuration shared by
validators, checkers and the CLI.
"""

import os
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict


class Verdict(Enum):
    """Outcome of a validation or checking run"""
    OK = "ok"
    WRONG_ANSWER = "wrong_answer"
    PRESENTATION_ERROR = "presentation_error"
    FAIL = "fail"

    @property
    def exit_code(self) -> int:
        """Process exit status the harness maps back to this verdict"""
        return _EXIT_CODES[self]

    @property
    def label(self) -> str:
        """Word written at the start of the report line"""
        return _LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> "Verdict":
        """Resolve a verdict from its name, value or short alias"""
        key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
        key = _ALIASES.get(key, key)
        for verdict in cls:
            if key in (verdict.value, verdict.name.lower()):
                return verdict
        raise ValueError(f"Unknown verdict: {name!r}")


_EXIT_CODES = {
    Verdict.OK: 0,
    Verdict.WRONG_ANSWER: 1,
    Verdict.PRESENTATION_ERROR: 2,
    Verdict.FAIL: 3,
}

_LABELS = {
    Verdict.OK: "ok",
    Verdict.WRONG_ANSWER: "wrong answer",
    Verdict.PRESENTATION_ERROR: "wrong output format",
    Verdict.FAIL: "FAIL",
}

_ALIASES = {
    "ac": "ok",
    "accepted": "ok",
    "wa": "wrong_answer",
    "pe": "presentation_error",
    "wrong_output_format": "presentation_error",
    "ie": "fail",
    "internal_error": "fail",
}


class StreamRole(Enum):
    """Which file a stream was opened over"""
    INPUT = "input"
    OUTPUT = "output"
    ANSWER = "answer"


REPORT_CHANNELS = ("stderr", "stdout")

_TRUE_WORDS = ("true", "yes", "on", "1")
_FALSE_WORDS = ("false", "no", "off", "0")


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{name} must be true or false, got {value!r}")


@dataclass
class KuroeConfig:
    """
    Configuration for validator and checker runs.

    Controls the report channel, stream decoding and the tolerances
    used by the built-in checkers.
    """
    # Reporting
    report_channel: str = "stderr"
    log_level: str = "WARNING"

    # Streams
    encoding: str = "utf-8"
    allow_trailing_output: bool = False
    unexpected_eof_verdict: str = "wrong_answer"

    # Floating point comparison
    float_abs_tolerance: float = 1e-6
    float_rel_tolerance: float = 1e-6

    def __post_init__(self):
        if self.report_channel not in REPORT_CHANNELS:
            raise ValueError(
                f"report_channel must be one of {REPORT_CHANNELS}, got {self.report_channel!r}"
            )
        eof_verdict = Verdict.from_name(self.unexpected_eof_verdict)
        if eof_verdict not in (Verdict.WRONG_ANSWER, Verdict.PRESENTATION_ERROR):
            raise ValueError(
                "unexpected_eof_verdict must be wrong_answer or presentation_error"
            )
        self.unexpected_eof_verdict = eof_verdict.value
        self.allow_trailing_output = _parse_bool("allow_trailing_output", self.allow_trailing_output)
        # PyYAML reads "1e-6" (no dot) as a string
        self.float_abs_tolerance = float(self.float_abs_tolerance)
        self.float_rel_tolerance = float(self.float_rel_tolerance)
        if self.float_abs_tolerance < 0 or self.float_rel_tolerance < 0:
            raise ValueError("Float tolerances must be non-negative")

    @property
    def eof_verdict(self) -> Verdict:
        """Verdict for contestant output that ends too early"""
        return Verdict.from_name(self.unexpected_eof_verdict)

    @classmethod
    def from_yaml(cls, path: str) -> "KuroeConfig":
        """Load config from YAML file"""
        import yaml

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

        return cls(**data)

    @classmethod
    def from_env(cls) -> "KuroeConfig":
        """Load config from environment variables"""
        return cls(
            report_channel=os.getenv("KUROE_REPORT_CHANNEL", "stderr"),
            log_level=os.getenv("KUROE_LOG_LEVEL", "WARNING"),
            encoding=os.getenv("KUROE_ENCODING", "utf-8"),
            allow_trailing_output=os.getenv("KUROE_ALLOW_TRAILING_OUTPUT", "false"),
            unexpected_eof_verdict=os.getenv("KUROE_UNEXPECTED_EOF_VERDICT", "wrong_answer"),
            float_abs_tolerance=float(os.getenv("KUROE_FLOAT_ABS_TOLERANCE", "1e-6")),
            float_rel_tolerance=float(os.getenv("KUROE_FLOAT_REL_TOLERANCE", "1e-6")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return asdict(self)


DEFAULT_CONFIG_TEMPLATE = """# kuroe configuration

# Where the single verdict line is written: stderr or stdout
report_channel: stderr
log_level: WARNING

# Stream settings
encoding: utf-8
allow_trailing_output: false       # accept extra content after a correct answer
unexpected_eof_verdict: wrong_answer  # or presentation_error

# Tolerances for the floats checker
float_abs_tolerance: 1.0e-6
float_rel_tolerance: 1.0e-6
"""
