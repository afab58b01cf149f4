"""
Custom Exceptions - HumanVQ
humanvq/core/exceptions.py

Exception classes for the boundary layer. The scoring functions themselves
never raise; these cover parsing persisted rows and validating status writes.
"""


class HumanVQException(Exception):
    """Base exception for HumanVQ."""

    pass


class SnapshotParseError(HumanVQException):
    """A persisted path field could not be decoded."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Could not parse {field}: {reason}")


class UnknownResourceTypeError(HumanVQException):
    """Resource type is neither an AI tool nor a human course."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(f"Unknown resource type: {resource_type}")


class InvalidResourceStatusError(HumanVQException):
    """Status is not allowed for the given resource type."""

    def __init__(self, resource_type: str, status: str, allowed: list[str]):
        self.resource_type = resource_type
        self.status = status
        self.allowed = allowed
        kind = "tool" if resource_type == "ai_tool" else "course"
        super().__init__(
            f"Invalid status for {kind}: {status}. Allowed: {', '.join(allowed)}"
        )


class ConfigurationError(HumanVQException):
    """Settings could not be loaded or are inconsistent."""

    def __init__(self, message: str = "Invalid configuration"):
        self.message = message
        super().__init__(message)
