"""Manifest validation -- apply the skill schema and collect every violation.

Typical usage::

    from skillpack.manifest import parse_manifest
    from skillpack.validation import validate_manifest

    result = validate_manifest(parse_manifest("./my-skill"))
    if not result.is_valid:
        for violation in result.violations:
            print(violation)

Sub-modules:

* :mod:`~skillpack.validation.rules` -- One function per frontmatter field,
  plus advisory warning helpers.
* :mod:`~skillpack.validation.validator` -- Runs the rules and builds the
  :class:`~skillpack.models.ValidationResult`.
"""

from skillpack.validation.validator import validate_manifest, validate_skill

__all__ = ["validate_manifest", "validate_skill"]
