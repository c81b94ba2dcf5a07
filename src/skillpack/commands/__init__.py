"""Built-in CLI sub-commands for skillpack.

* :mod:`~skillpack.commands.package` -- validate a skill and write its archive.
* :mod:`~skillpack.commands.validate` -- validate without packaging.
* :mod:`~skillpack.commands.config` -- view and modify global defaults.

``package`` and ``validate`` are plain callback functions registered
directly on the root app; ``config`` is a :class:`typer.Typer`
sub-application.
"""
