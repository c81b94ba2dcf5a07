"""Sequence parse -> validate -> build and reduce the run to one outcome.

:func:`package_skill` is a stateless function of its arguments and the
filesystem. Each stage returns an explicit value; the orchestrator inspects
it and either moves on or stops with the matching
:data:`~skillpack.models.PackagingOutcome`:

============================  ===============================
Stage result                  Outcome
============================  ===============================
``PathError``                 ``SystemFailure`` (exit 2)
``MalformedManifest``         ``ValidationFailure`` (exit 1)
invalid ``ValidationResult``  ``ValidationFailure`` (exit 1)
``BuildError``                ``SystemFailure`` (exit 2)
``BuildResult``               ``PackageSuccess`` (exit 0)
============================  ===============================

Nothing is retried; every failure is terminal for the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from skillpack.manifest import parse_manifest
from skillpack.models import (
    BuildError,
    MalformedManifest,
    PackageSuccess,
    PackagingOutcome,
    PathError,
    SystemFailure,
    ValidationFailure,
)
from skillpack.packaging.archive import archive_path_for, build_archive
from skillpack.packaging.enumerator import enumerate_skill
from skillpack.validation import validate_manifest

logger = logging.getLogger(__name__)


def package_skill(
    skill_path: str | Path,
    output_dir: str | Path | None = None,
    *,
    force: bool = False,
    allow_unknown_fields: bool = True,
) -> PackagingOutcome:
    """Validate the skill at *skill_path* and write ``<name>.skill``.

    Args:
        skill_path: Skill directory, or the ``SKILL.md`` inside it.
        output_dir: Destination directory; created if missing. Defaults to
            the current working directory.
        force: Overwrite an existing archive.
        allow_unknown_fields: Tolerate frontmatter keys outside the schema.

    Returns:
        :class:`~skillpack.models.PackageSuccess`,
        :class:`~skillpack.models.ValidationFailure`, or
        :class:`~skillpack.models.SystemFailure`.
    """
    logger.debug("Parsing manifest at %s", skill_path)
    document = parse_manifest(skill_path)
    if isinstance(document, PathError):
        return SystemFailure(cause=document.message, path=document.path, stage="parse")
    if isinstance(document, MalformedManifest):
        return ValidationFailure(
            violations=(document.message,), skill_path=document.path
        )

    logger.debug("Validating %s", document.manifest_path)
    result = validate_manifest(document, allow_unknown_fields=allow_unknown_fields)
    if not result.is_valid or result.manifest is None:
        return ValidationFailure(
            violations=result.violations,
            warnings=result.warnings,
            skill_path=document.skill_dir,
        )
    name = result.manifest.name

    target_dir = Path(output_dir).expanduser() if output_dir is not None else Path.cwd()
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return SystemFailure(
            cause=f"Failed to create output directory {target_dir}: {exc.strerror or exc}",
            path=target_dir,
        )
    target_dir = target_dir.resolve()

    logger.debug("Building %s", archive_path_for(target_dir, name))
    skill = enumerate_skill(document.skill_dir, exclude=archive_path_for(target_dir, name))
    if isinstance(skill, BuildError):
        return SystemFailure(cause=skill.message, path=skill.path)

    built = build_archive(skill, name, target_dir, force=force)
    if isinstance(built, BuildError):
        return SystemFailure(cause=built.message, path=built.path)

    return PackageSuccess(
        archive_path=built.archive_path,
        file_count=built.file_count,
        size=built.size,
        warnings=result.warnings,
    )
