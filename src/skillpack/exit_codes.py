"""Numeric process exit codes for skillpack.

Scripts and CI jobs rely on these values to tell a broken skill apart from a
broken environment without parsing stderr. Each constant is referenced by
the corresponding :class:`~skillpack.exceptions.SkillpackError` subclass and
by the :class:`~skillpack.models.PackagingOutcome` variants.

Example::

    $ skillpack package ./my-skill -o dist
    $ echo $?
    1   # EXIT_VALIDATION_FAILURE -- SKILL.md does not conform to the schema
"""

EXIT_SUCCESS = 0
"""The skill was packaged (or validated) successfully."""

EXIT_VALIDATION_FAILURE = 1
"""The skill directory exists but its manifest or content is non-conformant."""

EXIT_SYSTEM_ERROR = 2
"""A filesystem or environment problem: missing path, unwritable output,
destination conflict without ``--force``, bad configuration."""

EXIT_CANCELLED = 130
"""The run was interrupted with Ctrl-C."""
