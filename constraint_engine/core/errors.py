"""
Engine Errors — what fails fast and what gets contained.

ConfigurationError and DiscoveryError propagate to the caller.
RuleExecutionError and FileAccessError are contained by the engine and turned
into log records or synthetic violations.
"""

from __future__ import annotations

from collections.abc import Sequence


class ConstraintEngineError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(ConstraintEngineError):
    """A rule (or rule source) was defined without required fields."""

    def __init__(self, message: str, missing_fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing_fields = list(missing_fields)

    @classmethod
    def missing(cls, fields: Sequence[str]) -> ConfigurationError:
        return cls(f"Rule is missing required field(s): {', '.join(fields)}", fields)


class RuleExecutionError(ConstraintEngineError):
    """A rule's validate function raised or returned garbage."""

    def __init__(self, rule_id: str, file_path: str, cause: BaseException) -> None:
        super().__init__(f"Rule '{rule_id}' failed for {file_path}: {cause}")
        self.rule_id = rule_id
        self.file_path = file_path
        self.cause = cause


class FileAccessError(ConstraintEngineError):
    """A file could not be read as UTF-8 text."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Failed to read file: {cause}")
        self.path = path
        self.cause = cause


class DiscoveryError(ConstraintEngineError):
    """Pattern expansion failed; no file list can be trusted."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid file pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason
