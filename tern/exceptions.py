# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Tern completion engine.

"No suggestions" is never an exception in Tern: every failed match resolves to
an absent result. These exceptions cover broken grammar catalogs, bad
configuration, and internal invariant violations.

All exceptions inherit from `TernError`, the base exception for the package.

Exception Hierarchy:
- TernError
    ├── SpecLoadError
    ├── SpecFormatError
    ├── UnsupportedSpecLocationError
    ├── InvalidMatcherStateError
    └── ConfigError
"""


class TernError(Exception):
    """Base exception for Tern."""


class SpecLoadError(TernError):
    """Exception raised when a grammar cannot be read from its source."""


class SpecFormatError(TernError):
    """Exception raised when a grammar document does not match the schema."""


class UnsupportedSpecLocationError(TernError):
    """Exception raised when a spec location kind has no loader."""


class InvalidMatcherStateError(TernError, AssertionError):
    """Exception raised when the matcher reaches a state its callers rule out."""


class ConfigError(TernError):
    """Exception raised when the Tern configuration file is invalid."""
