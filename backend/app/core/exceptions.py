"""
PURPOSE: Error taxonomy for signal ingestion and dashboard aggregation.

    - ValidationError: malformed or incomplete inbound payload (client-fixable).
    - StorageError:    the signal store was unreachable or a query/write failed.
    - CacheError:      the dashboard cache was unreachable; never fails a read.
"""


class SignalSyncError(Exception):
    """Base class for all service errors."""


class ValidationError(SignalSyncError):
    """Inbound payload cannot be turned into a Signal."""


class StorageError(SignalSyncError):
    """Signal store read or write failed."""


class CacheError(SignalSyncError):
    """Dashboard cache read or write failed."""
