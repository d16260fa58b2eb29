"""
Token Streams

Forward-only, format-aware readers used by validators and checkers.
"""

from .reader import TokenStream

__all__ = [
    "TokenStream",
]
