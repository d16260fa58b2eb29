"""
Output Formatting

Formats verdicts for the report channel.
"""

from .base import BaseFormatter, OutputLevel
from .console import ConsoleFormatter

__all__ = [
    "BaseFormatter",
    "OutputLevel",
    "ConsoleFormatter",
]
