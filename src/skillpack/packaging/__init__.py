"""Turn a validated skill directory into a ``.skill`` archive.

Sub-modules:

* :mod:`~skillpack.packaging.enumerator` -- List the regular files of a skill.
* :mod:`~skillpack.packaging.archive` -- Write them into a ZIP archive.
* :mod:`~skillpack.packaging.orchestrator` -- Run parse, validate and build
  and reduce the run to one :data:`~skillpack.models.PackagingOutcome`.
"""

from skillpack.packaging.archive import ARCHIVE_SUFFIX, build_archive
from skillpack.packaging.enumerator import enumerate_skill
from skillpack.packaging.orchestrator import package_skill

__all__ = ["ARCHIVE_SUFFIX", "build_archive", "enumerate_skill", "package_skill"]
