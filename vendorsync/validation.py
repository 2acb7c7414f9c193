"""
Validation — Error types and pre-flight checks.

Pre-flight failures (a missing upstream checkout, a missing subtree) are
reported before anything on disk is touched. Filesystem errors raised while
copying are NOT wrapped here: they propagate to the caller unchanged.

## Usage

    from vendorsync.validation import MissingPathError, validate_path_exists

    try:
        validate_path_exists(upstream_dir, "llvm tree")
    except MissingPathError as e:
        print(e)
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict] = None):
        self.message = message
        self.field = field
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class ConfigurationError(Exception):
    """Raised when a sync profile is unknown, missing, or malformed."""
    pass


class MissingPathError(ValidationError):
    """
    Raised when a path required by a sync profile does not exist.

    The message mirrors what the maintenance scripts have always printed:
    ``<path> not found`` or, when a label is given,
    ``<label> not found: <path>``.
    """

    def __init__(self, path: Path, label: Optional[str] = None):
        self.path = Path(path)
        self.label = label
        if label:
            message = f"{label} not found: {self.path}"
        else:
            message = f"{self.path} not found"
        super().__init__(message, details={"path": str(self.path)})


def validate_path_exists(path: Path, description: Optional[str] = None) -> None:
    """Raise MissingPathError if ``path`` does not exist."""
    if not Path(path).exists():
        raise MissingPathError(path, description)
