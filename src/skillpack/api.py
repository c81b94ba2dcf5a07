"""Exception-raising wrappers around the packaging pipeline.

The pipeline returns outcome values; library callers that prefer
exceptions use these functions instead::

    from skillpack.api import create_package
    from skillpack.exceptions import ValidationError

    try:
        archive = create_package("./my-skill", "dist")
    except ValidationError as exc:
        for violation in exc.violations:
            print(violation)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from skillpack.exceptions import FileSystemError, PathNotFoundError, ValidationError
from skillpack.models import (
    PackageSuccess,
    PackagingOutcome,
    PathError,
    SystemFailure,
    ValidationFailure,
    ValidationResult,
)
from skillpack.packaging import package_skill
from skillpack.validation import validate_skill


def raise_for_outcome(outcome: PackagingOutcome) -> PackageSuccess:
    """Return *outcome* if it is a success, otherwise raise the matching error.

    Raises:
        ValidationError: For a :class:`~skillpack.models.ValidationFailure`.
        PathNotFoundError: For a :class:`~skillpack.models.SystemFailure`
            from the parse stage (the skill path is unusable).
        FileSystemError: For any other :class:`~skillpack.models.SystemFailure`.
    """
    if isinstance(outcome, PackageSuccess):
        return outcome
    if isinstance(outcome, ValidationFailure):
        raise ValidationError(
            f"Skill validation failed with {len(outcome.violations)} violation(s)",
            violations=outcome.violations,
            path=outcome.skill_path,
        )
    if isinstance(outcome, SystemFailure):
        if outcome.stage == "parse":
            raise PathNotFoundError(outcome.cause, path=outcome.path)
        raise FileSystemError(outcome.cause, path=outcome.path)
    raise TypeError(f"Unexpected packaging outcome: {outcome!r}")


def create_package(
    skill_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    *,
    force: bool = False,
    allow_unknown_fields: bool = True,
) -> Path:
    """Validate and package a skill, returning the absolute archive path.

    Raises:
        PathNotFoundError: The skill path or its ``SKILL.md`` is unusable.
        ValidationError: The manifest is malformed or breaks a rule.
        FileSystemError: The archive could not be written.
    """
    outcome = package_skill(
        skill_path,
        output_dir,
        force=force,
        allow_unknown_fields=allow_unknown_fields,
    )
    return raise_for_outcome(outcome).archive_path


def validate(
    skill_path: Union[str, Path],
    *,
    allow_unknown_fields: bool = True,
) -> ValidationResult:
    """Validate a skill without packaging it.

    Returns:
        The :class:`~skillpack.models.ValidationResult`, valid or not.

    Raises:
        PathNotFoundError: The skill path or its ``SKILL.md`` is unusable.
    """
    result = validate_skill(skill_path, allow_unknown_fields=allow_unknown_fields)
    if isinstance(result, PathError):
        raise PathNotFoundError(result.message, path=result.path)
    return result
