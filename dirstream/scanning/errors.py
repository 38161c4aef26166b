"""Exceptions raised by a directory scan.

Every error is fatal to the scan that raised it. The message of each
exception is the human-readable text shown to the caller.
"""


class DirectoryScanError(RuntimeError):
    """Base class for all scan failures."""


class PathAccessError(DirectoryScanError):
    """The root path could not be resolved (missing, permission denied, invalid)."""


class PathNotADirectoryError(DirectoryScanError):
    """The root path resolved to something other than a directory."""


class ScanError(DirectoryScanError):
    """Listing the directory failed after the root was validated."""


class MetadataError(DirectoryScanError):
    """The metadata of a single entry could not be read."""


class SinkError(DirectoryScanError):
    """Delivering an event to the sink failed."""


class ScanTaskError(DirectoryScanError):
    """The worker running the scan failed outside the scan itself."""
