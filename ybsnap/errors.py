"""Exceptions that abort a collection pass."""


class YbSnapError(Exception):
    """Base class for errors surfaced to the caller."""


class SnapshotError(YbSnapError):
    """Snapshot could not be stored or read back."""


class LeaderNotFoundError(YbSnapError):
    """No node reported itself as the cluster leader."""
