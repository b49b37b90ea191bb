"""
Exception hierarchy for dataset generation and output sinks.

Every violated precondition is a hard stop: a dataset is either fully
consistent or not produced at all.
"""

from typing import Any


class GenerationError(Exception):
    """Base class for all generation failures."""


class ConfigError(GenerationError):
    """Raised when a GenerationConfig holds invalid values."""


class DistributionError(GenerationError):
    """Raised when a sampler is built from malformed weights or probabilities."""


class PreconditionError(GenerationError):
    """Raised when upstream data cannot satisfy a generator's requirements."""


class InsufficientPersonsError(PreconditionError):
    """Raised when more labor contracts are requested than unique persons exist."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient unique persons: {requested} labor contracts "
            f"requested but only {available} persons generated"
        )


class MissingRoleError(PreconditionError):
    """Raised when no staff member holds an account role a generator needs."""

    def __init__(self, role: Any, holders: str):
        self.role = role
        super().__init__(f"There are no {holders} on staff (role {role})")


class SampleLookupError(PreconditionError):
    """Raised when a natural-key lookup between sample tables misses."""


class UniquenessExhaustedError(PreconditionError):
    """Raised when bounded retries could not produce a fresh unique value."""


class PushError(Exception):
    """
    Raised when a single insert fails during a push.

    Attributes:
        group: Dependency group index being pushed
        collection: Collection name of the failing record
        record: The record whose insert failed
    """

    def __init__(self, group: int, collection: str, record: Any, cause: BaseException):
        self.group = group
        self.collection = collection
        self.record = record
        super().__init__(
            f"Push aborted in group {group}: insert into '{collection}' failed "
            f"for {record!r}: {cause}"
        )
