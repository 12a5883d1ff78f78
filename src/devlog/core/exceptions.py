"""devlog exception hierarchy."""

from __future__ import annotations


class DevLogError(Exception):
    """Base exception for all devlog errors."""


class ConfigError(DevLogError):
    """Raised when the settings file is invalid or cannot be read or written."""


class StoreError(DevLogError):
    """Base class for log store failures."""


class StorageUnavailableError(StoreError):
    """Raised when the log database cannot be opened, created, or migrated."""


class WriteFailureError(StoreError):
    """Raised when inserting or deleting rows fails on an open store."""


class ReadFailureError(StoreError):
    """Raised when querying rows fails on an open store."""
