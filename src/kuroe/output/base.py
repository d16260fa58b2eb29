"""
Base Output Formatter
"""

from abc import ABC, abstractmethod
from enum import Enum

from ..verification.runner import RunOutcome


class OutputLevel(Enum):
    """Output verbosity levels"""
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3

    def __ge__(self, other: "OutputLevel") -> bool:
        return self.value >= other.value

    def __lt__(self, other: "OutputLevel") -> bool:
        return self.value < other.value


class BaseFormatter(ABC):
    """Base class for verdict report formatters"""

    def __init__(self, level: OutputLevel = OutputLevel.NORMAL):
        self.level = level

    @abstractmethod
    def report(self, outcome: RunOutcome) -> None:
        """Write the verdict line for one run"""
        pass
