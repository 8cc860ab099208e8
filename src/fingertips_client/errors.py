"""Error taxonomy raised while resolving and fetching Fingertips data.

Every error derives from :class:`FingertipsError` and from :class:`ValueError`,
so callers may catch either the library-specific base or the builtin. Transport
failures from ``requests`` are never wrapped.

Hierarchy::

    FingertipsError
    ├── InvalidSelector
    ├── MismatchedLength
    ├── InvalidArgument
    ├── InvalidAreaType
    └── InvalidAreaCode
"""

from __future__ import annotations

from typing import Any


class FingertipsError(ValueError):
    """Base class for argument and lookup failures.

    Attributes:
        message: Human-readable error message
        details: Offending values, for logging and programmatic handling
    """

    def __init__(self, message: str, **details: Any) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidSelector(FingertipsError):
    """None of IndicatorID, DomainID or ProfileID was supplied."""


class MismatchedLength(FingertipsError):
    """ProfileID and IndicatorID were both supplied with different lengths."""


class InvalidArgument(FingertipsError):
    """An argument has an unusable value (non-boolean flag, missing area type)."""


class InvalidAreaType(FingertipsError):
    """An AreaTypeID is unknown to the area types reference table."""


class InvalidAreaCode(FingertipsError):
    """An AreaCode does not belong to any of the requested area types."""


class FingertipsWarning(UserWarning):
    """Advisory raised through :mod:`warnings`; execution continues."""


__all__ = [
    "FingertipsError",
    "FingertipsWarning",
    "InvalidArgument",
    "InvalidAreaCode",
    "InvalidAreaType",
    "InvalidSelector",
    "MismatchedLength",
]
