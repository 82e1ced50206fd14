"""Exception hierarchy for covtree."""

from __future__ import annotations


class CovtreeError(Exception):
    """Base class for every error raised by covtree."""


class ConfigurationError(CovtreeError):
    """The inputs or their declared prefixes cannot produce a valid tree."""


class PrefixMismatchError(ConfigurationError):
    """A record path does not start with the prefix declared for its input."""

    def __init__(self, path: str, prefix: str) -> None:
        """Initialize with the offending path and the expected prefix.

        Args:
            path: Source file path found in the coverage input.
            prefix: Prefix every path of that input was expected to start with.
        """
        super().__init__(
            f"Some tested files do not start with the prefix '{prefix}'. For example, {path}"
        )
        self.path = path
        self.prefix = prefix


class EmptyPathError(ConfigurationError):
    """A record path has no component at all."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Coverage record path {path!r} has no path component")
        self.path = path


class ParentDirectoryError(ConfigurationError):
    """A record path climbs out of its position with a ``..`` component."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Coverage record path {path!r} contains '..' below the root prefix; "
            "declare a prefix that covers it or normalize the tracefile paths"
        )
        self.path = path


class DuplicateRecordError(ConfigurationError):
    """Two records were inserted at the same tree position."""

    def __init__(self, path: str) -> None:
        super().__init__(f"A coverage record already exists for {path!r}")
        self.path = path


class DuplicateKeyError(ConfigurationError):
    """Two roots with the same key were added to one multi-report."""

    def __init__(self, key: str) -> None:
        super().__init__(f"A report with key {key!r} is already part of this multi-report")
        self.key = key


class TreeInvariantError(CovtreeError):
    """Two tree positions have no representable relationship."""
