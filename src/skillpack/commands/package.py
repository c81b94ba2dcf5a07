"""Package command -- validate a skill and write its ``.skill`` archive.

Implements ``skillpack package``. The command resolves packaging defaults
through :func:`~skillpack.config.resolve_config`, runs
:func:`~skillpack.packaging.package_skill`, and turns the returned outcome
into output and an exit code:

* success -- the absolute archive path on stdout (exit 0);
* validation failure -- every violation on stderr (exit 1);
* system failure -- one error naming the path on stderr (exit 2).
"""

from __future__ import annotations

from typing import Optional

import typer

from skillpack.exceptions import ConfigError
from skillpack.models import PackageSuccess, PackagingOutcome, ValidationFailure
from skillpack.output import (
    OutputFormat,
    debug,
    error,
    error_list,
    format_response,
    get_output,
    info,
    print_data,
    success,
    suggest,
    warning,
)


def package_command(
    skill_path: str = typer.Argument(
        help="Skill directory (or its SKILL.md) to package."
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the archive (default: current directory).",
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing archive."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Print only the archive path."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Treat unknown frontmatter keys as violations."
    ),
) -> None:
    """Validate a skill and package it into a .skill archive.

    Example::

        skillpack package ./pdf-tools
        skillpack package ./pdf-tools -o dist --force
        ARCHIVE=$(skillpack package ./pdf-tools -q)
    """
    from skillpack.config import resolve_config
    from skillpack.packaging import package_skill

    output = get_output()
    if quiet:
        output.is_quiet = True

    try:
        config = resolve_config(
            cli_output_dir=output_dir,
            cli_force=force or None,
            cli_strict=strict or None,
        )
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Packaging {skill_path} into {config.output_dir or '.'}")
    outcome = package_skill(
        skill_path,
        config.output_dir,
        force=config.force,
        allow_unknown_fields=config.allow_unknown_fields,
    )
    report_outcome(outcome, skill_path)

    if outcome.exit_code:
        raise typer.Exit(code=outcome.exit_code)


def report_outcome(outcome: PackagingOutcome, skill_path: str) -> None:
    """Write *outcome* to stdout/stderr according to the output contract."""
    if get_output().format == OutputFormat.JSON:
        format_response(outcome.model_dump(mode="json"))
        if isinstance(outcome, ValidationFailure):
            error_list(_failure_title(skill_path, outcome), outcome.violations)
        elif not isinstance(outcome, PackageSuccess):
            error(outcome.cause)
        return

    if isinstance(outcome, PackageSuccess):
        print_data(str(outcome.archive_path))
        for message in outcome.warnings:
            warning(message)
        success("Package created successfully!")
        info(f"  Files: {outcome.file_count}")
        info(f"  Size:  {format_size(outcome.size)}")
        suggest(f"Inspect the contents with: unzip -l {outcome.archive_path}")
    elif isinstance(outcome, ValidationFailure):
        error_list(_failure_title(skill_path, outcome), outcome.violations)
        for message in outcome.warnings:
            warning(message)
        suggest(f"Fix the SKILL.md frontmatter, then check with: skillpack validate {skill_path}")
    else:
        error(outcome.cause)


def _failure_title(skill_path: str, outcome: ValidationFailure) -> str:
    count = len(outcome.violations)
    noun = "violation" if count == 1 else "violations"
    return f"Validation failed for {skill_path} ({count} {noun}):"


def format_size(size: int) -> str:
    """Render a byte count as ``512 B``, ``3.4 KB`` or ``1.2 MB``."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
