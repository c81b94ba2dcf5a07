"""Manifest parser -- read ``SKILL.md`` and split its YAML frontmatter from the body.

This sub-package is the first stage of the skillpack pipeline. It turns a
skill path into a :class:`~skillpack.models.ManifestDocument`, or into a
:class:`~skillpack.models.PathError` /
:class:`~skillpack.models.MalformedManifest` value describing why it could
not.

Typical usage::

    from skillpack.manifest import parse_manifest

    document = parse_manifest("./my-skill")
"""

from skillpack.manifest.parser import (
    SKILL_FILENAME,
    parse_content,
    parse_manifest,
    resolve_skill_dir,
)

__all__ = ["SKILL_FILENAME", "parse_content", "parse_manifest", "resolve_skill_dir"]
