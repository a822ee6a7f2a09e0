from __future__ import annotations


class SnapshotSyncError(RuntimeError):
    """Base class for failures that abort a sync run."""


class MissingCredentialsError(SnapshotSyncError):
    pass


class StravaAuthError(SnapshotSyncError):
    pass


class StravaFetchError(SnapshotSyncError):
    pass


class SnapshotFileError(SnapshotSyncError):
    pass
