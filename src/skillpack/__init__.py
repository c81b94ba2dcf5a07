"""skillpack -- Validate and package skill directories into ``.skill`` archives.

A *skill* is a directory containing a ``SKILL.md`` manifest (YAML
frontmatter followed by a Markdown body) plus any supporting files. This
package checks the manifest against the skill schema and, when it passes,
writes the whole directory into a single ``<name>.skill`` ZIP archive.

Typical workflow::

    skillpack validate ./my-skill         # report every violation
    skillpack package ./my-skill -o dist  # write dist/my-skill.skill

The exit code tells scripts what happened: ``0`` success, ``1`` the skill
is invalid, ``2`` a filesystem or environment problem.

Modules:
    app: Typer application factory and CLI entry point.
    api: Exception-raising wrappers for library callers.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration with precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
