"""Exceptions raised when loading monitoring resources.

The generators themselves never raise; these only surface from the loader
and the CLI that sits in front of it.
"""


class MonitorCoreError(Exception):
    """Base class for monitorcore errors."""


class UnsupportedKindError(MonitorCoreError, ValueError):
    """A manifest declares a ``kind`` the loader does not handle."""

    def __init__(self, kind: str, source: str = ""):
        self.kind = kind
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Unsupported kind {kind!r}{where}")


class ObjectNotFoundError(MonitorCoreError, ValueError):
    """A manifest file holds no object of the requested kind."""

    def __init__(self, kind: str, source: str):
        self.kind = kind
        self.source = source
        super().__init__(f"No {kind} found in {source}")
