"""Validate command -- check a skill without packaging it."""

from __future__ import annotations

import typer

from skillpack.exceptions import ConfigError
from skillpack.exit_codes import EXIT_SYSTEM_ERROR, EXIT_VALIDATION_FAILURE
from skillpack.models import PathError
from skillpack.output import (
    OutputFormat,
    error,
    error_list,
    format_response,
    get_output,
    success,
    warning,
)


def validate_command(
    skill_path: str = typer.Argument(
        help="Skill directory (or its SKILL.md) to validate."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only report violations."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Treat unknown frontmatter keys as violations."
    ),
) -> None:
    """Validate a skill's SKILL.md and report every violation.

    Exits 0 when the skill is valid, 1 when it has violations and 2 when
    the path cannot be used.

    Example::

        skillpack validate ./pdf-tools
        skillpack --json validate ./pdf-tools
    """
    from skillpack.config import resolve_config
    from skillpack.validation import validate_skill

    output = get_output()
    if quiet:
        output.is_quiet = True

    try:
        config = resolve_config(cli_strict=strict or None)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    result = validate_skill(skill_path, allow_unknown_fields=config.allow_unknown_fields)
    if isinstance(result, PathError):
        error(result.message)
        raise typer.Exit(code=EXIT_SYSTEM_ERROR)

    if output.format == OutputFormat.JSON:
        format_response(
            {
                "valid": result.is_valid,
                "name": result.manifest.name if result.manifest else None,
                "violations": list(result.violations),
                "warnings": list(result.warnings),
            }
        )

    if not result.is_valid:
        count = len(result.violations)
        noun = "violation" if count == 1 else "violations"
        error_list(f"Validation failed for {skill_path} ({count} {noun}):", result.violations)
        for message in result.warnings:
            warning(message)
        raise typer.Exit(code=EXIT_VALIDATION_FAILURE)

    for message in result.warnings:
        warning(message)
    assert result.manifest is not None
    success(f'Skill "{result.manifest.name}" is valid.')
