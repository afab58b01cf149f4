"""
Core Package - HumanVQ
humanvq/core/__init__.py

Core infrastructure: exceptions.
"""

from humanvq.core.exceptions import (
    ConfigurationError,
    HumanVQException,
    InvalidResourceStatusError,
    SnapshotParseError,
    UnknownResourceTypeError,
)

__all__ = [
    "ConfigurationError",
    "HumanVQException",
    "InvalidResourceStatusError",
    "SnapshotParseError",
    "UnknownResourceTypeError",
]
