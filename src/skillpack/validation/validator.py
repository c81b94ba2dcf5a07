"""Apply the manifest schema to a parsed ``SKILL.md``.

:func:`validate_manifest` runs every rule from
:mod:`skillpack.validation.rules` and collects *all* violations rather
than stopping at the first, so a single edit pass can fix everything. When
no violation is found the frontmatter is loaded into a typed
:class:`~skillpack.models.SkillManifest`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from skillpack.manifest import parse_manifest
from skillpack.models import (
    MalformedManifest,
    ManifestDocument,
    PathError,
    SkillManifest,
    ValidationResult,
)
from skillpack.validation.rules import (
    FIELD_RULES,
    KNOWN_FIELDS,
    body_size_warnings,
    check_name,
    hook_warnings,
    is_blank,
    model_warnings,
    type_name,
)

logger = logging.getLogger(__name__)


def validate_manifest(
    document: ManifestDocument,
    *,
    allow_unknown_fields: bool = True,
) -> ValidationResult:
    """Validate a parsed manifest against the skill schema.

    Args:
        document: Output of :func:`~skillpack.manifest.parse_manifest`.
        allow_unknown_fields: When ``False``, frontmatter keys outside the
            schema are violations instead of warnings.

    Returns:
        A :class:`~skillpack.models.ValidationResult`. Its ``manifest`` is
        set only when there are no violations.
    """
    data = document.frontmatter

    if data is None or data == {}:
        return ValidationResult(violations=("Frontmatter cannot be empty",))

    if not isinstance(data, dict):
        return ValidationResult(
            violations=(
                "Frontmatter must be a YAML mapping of key-value pairs "
                f"(got {type_name(data)})",
            )
        )

    fields: dict[str, Any] = {str(key): value for key, value in data.items()}
    violations: list[str] = []
    warnings: list[str] = []

    name_error = check_name(fields.get("name"))
    if name_error:
        violations.append(name_error)

    for field, rule in FIELD_RULES.items():
        value = fields.get(field)
        if value is None:
            continue
        error = rule(value)
        if error:
            violations.append(error)

    unknown = [key for key in fields if key not in KNOWN_FIELDS]
    if unknown:
        if allow_unknown_fields:
            warnings.append(f"Unknown frontmatter keys (ignored): {', '.join(unknown)}")
        else:
            violations.append(
                f"Unexpected frontmatter keys: {', '.join(unknown)}. "
                f"Allowed keys are: {', '.join(['name', *FIELD_RULES])}"
            )

    if is_blank(fields.get("description")):
        warnings.append(
            "Missing recommended field: description. "
            "Agents use it to decide when to load the skill."
        )

    name = fields.get("name")
    if isinstance(name, str) and not name_error and name != document.skill_dir.name:
        warnings.append(
            f'Skill name "{name}" does not match directory name "{document.skill_dir.name}"'
        )

    warnings.extend(hook_warnings(fields.get("hooks")))
    warnings.extend(model_warnings(fields.get("model")))
    warnings.extend(body_size_warnings(document.body))

    if violations:
        logger.debug(
            "Manifest %s has %d violation(s)", document.manifest_path, len(violations)
        )
        return ValidationResult(violations=tuple(violations), warnings=tuple(warnings))

    try:
        manifest = SkillManifest.model_validate(fields)
    except PydanticValidationError as exc:
        return ValidationResult(
            violations=tuple(
                f"Field '{'.'.join(str(part) for part in err['loc'])}': {err['msg']}"
                for err in exc.errors()
            ),
            warnings=tuple(warnings),
        )

    return ValidationResult(warnings=tuple(warnings), manifest=manifest)


def validate_skill(
    skill_path: str | Path,
    *,
    allow_unknown_fields: bool = True,
) -> Union[ValidationResult, PathError]:
    """Parse and validate the skill at *skill_path*.

    A malformed manifest is reported as a single-violation
    :class:`~skillpack.models.ValidationResult`; only an unusable path is
    returned as a :class:`~skillpack.models.PathError`.
    """
    document = parse_manifest(skill_path)
    if isinstance(document, PathError):
        return document
    if isinstance(document, MalformedManifest):
        return ValidationResult(violations=(document.message,))
    return validate_manifest(document, allow_unknown_fields=allow_unknown_fields)
