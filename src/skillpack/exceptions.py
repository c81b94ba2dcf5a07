"""Exception hierarchy for skillpack.

The packaging pipeline itself returns explicit values (see
:mod:`skillpack.models`); exceptions are used only at the boundaries where
callers expect them: the library API in :mod:`skillpack.api`, configuration
loading, and the CLI entry point. Every exception inherits from
:class:`SkillpackError`, which carries an ``exit_code`` attribute mapped to
a constant from :mod:`skillpack.exit_codes`. The top-level error handler in
:func:`skillpack.app.main` catches ``SkillpackError`` and exits with the
appropriate code.

Subclass hierarchy::

    SkillpackError (exit 2)
    +-- PathNotFoundError   (exit 2)
    +-- FileSystemError     (exit 2)
    +-- ConfigError         (exit 2)
    +-- ValidationError     (exit 1)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from skillpack.exit_codes import EXIT_SYSTEM_ERROR, EXIT_VALIDATION_FAILURE


class SkillpackError(Exception):
    """Base exception for all skillpack errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`skillpack.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        path: Filesystem path involved in the failure, if any.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_SYSTEM_ERROR

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        exit_code: int | None = None,
    ):
        super().__init__(message)
        self.path = path
        if exit_code is not None:
            self.exit_code = exit_code


class PathNotFoundError(SkillpackError):
    """Raised when the skill path or its ``SKILL.md`` is missing or unreadable."""

    exit_code = EXIT_SYSTEM_ERROR


class FileSystemError(SkillpackError):
    """Raised when the archive cannot be written (unwritable output, existing destination, I/O failure)."""

    exit_code = EXIT_SYSTEM_ERROR


class ConfigError(SkillpackError):
    """Raised for configuration problems (invalid JSON, schema errors, bad env values)."""

    exit_code = EXIT_SYSTEM_ERROR


class ValidationError(SkillpackError):
    """Raised when a skill fails validation.

    Carries the full ordered list of violations so callers can report every
    problem at once.

    Args:
        message: Summary message.
        violations: Every rule violation, in the order they were found.
        path: The skill path that was validated.
    """

    exit_code = EXIT_VALIDATION_FAILURE

    def __init__(
        self,
        message: str,
        violations: Sequence[str] = (),
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message, path=path)
        self.violations: list[str] = list(violations)
