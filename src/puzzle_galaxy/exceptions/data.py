"""Data exceptions: taxonomy construction, puzzle records, live messages."""

from typing import Any, Dict, Optional

from .base import GalaxyError


class DataError(GalaxyError):
    """Base class for errors in reference data or incoming records."""
    pass


class TaxonomyError(DataError):
    """Raised when the technique taxonomy is not a partition."""

    def __init__(self, reason: str, technique: Optional[str] = None):
        details = {"reason": reason}
        if technique:
            details["technique"] = technique
        super().__init__(f"Invalid technique taxonomy: {reason}", details=details)
        self.reason = reason
        self.technique = technique


class MalformedRecordError(DataError):
    """Raised when a node or edge record cannot be decoded."""

    def __init__(self, kind: str, reason: str, record: Any = None):
        super().__init__(
            f"Malformed {kind} record: {reason}",
            details={"kind": kind, "reason": reason},
        )
        self.kind = kind
        self.reason = reason
        self.record = record


class MalformedMessageError(DataError):
    """Raised when a live-channel envelope cannot be decoded."""

    def __init__(self, reason: str, message_type: Any = None):
        details: Dict[str, Any] = {"reason": reason}
        if message_type is not None:
            details["type"] = str(message_type)
        super().__init__(f"Malformed live message: {reason}", details=details)
        self.reason = reason
        self.message_type = message_type
