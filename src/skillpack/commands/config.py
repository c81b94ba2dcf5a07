"""Config commands -- view and modify global packaging defaults.

Provides the ``skillpack config`` sub-command group for reading,
updating, and resetting the user's global configuration file
(:class:`~skillpack.models.PackagingConfig`). Project-local
``skillpack.json`` files and ``SKILLPACK_*`` environment variables still
take precedence over these values.
"""

from __future__ import annotations

import typer

from skillpack.exceptions import ConfigError
from skillpack.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False,
        "--effective",
        help="Show the resolved values after project config and environment.",
    ),
) -> None:
    """Show current configuration.

    Example::

        skillpack config show
        skillpack --json config show --effective
    """
    from skillpack.config import global_config_path, load_global_config, resolve_config

    try:
        config = resolve_config() if effective else load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config file: {global_config_path()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (e.g. 'output_dir', 'force')."),
    value: str = typer.Argument(help="Value to set. Use '' to clear output_dir."),
) -> None:
    """Set a configuration value.

    Boolean keys accept ``true/false``, ``yes/no``, ``on/off`` or ``1/0``.
    The updated config is validated against
    :class:`~skillpack.models.PackagingConfig` before saving.

    Example::

        skillpack config set output_dir ~/skills/dist
        skillpack config set allow_unknown_fields false
    """
    from skillpack.config import load_global_config, parse_bool, save_global_config
    from skillpack.models import PackagingConfig

    try:
        config = load_global_config()
        data = config.model_dump(mode="json")

        if key not in PackagingConfig.model_fields:
            raise ConfigError(
                f"Unknown config key: {key} "
                f"(valid keys: {', '.join(PackagingConfig.model_fields)})"
            )

        if PackagingConfig.model_fields[key].annotation is bool:
            coerced: object = parse_bool(value, key)
        elif key == "output_dir" and not value.strip():
            coerced = None
        else:
            coerced = value
        data[key] = coerced

        try:
            new_config = PackagingConfig.model_validate(data)
        except ValueError as exc:
            raise ConfigError(f"Validation error: {exc}") from exc

        save_global_config(new_config)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip the confirmation prompt."
    ),
) -> None:
    """Reset configuration to defaults.

    Example::

        skillpack config reset
        skillpack config reset --force
    """
    from skillpack.config import save_global_config
    from skillpack.models import PackagingConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    try:
        save_global_config(PackagingConfig())
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    success("Configuration reset to defaults.")
