import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional, TypeVar

from sqlmigrate.config import DEFAULT_SEQ_DIGITS, DEFAULT_TIME_FORMAT, DEFAULT_TIMEZONE
from sqlmigrate.utils.logging import get_logger

if TYPE_CHECKING:
    from click import Context, Group, Parameter

    from sqlmigrate.protocols import MigrationEngineProtocol

__all__ = ("add_migration_commands", "get_migrate_group", "load_engine")

logger = get_logger("cli")
T = TypeVar("T")


def _import_click() -> Any:
    from sqlmigrate.exceptions import MissingDependencyError

    try:
        import rich_click as click
    except ImportError:
        try:
            import click  # type: ignore[no-redef]
        except ImportError as e:
            raise MissingDependencyError(package="click", install_package="cli") from e
    return click


def load_engine(dotted_path: str) -> "MigrationEngineProtocol":
    """Resolve a migration engine from a dotted path.

    The path may point at an engine instance, or at a class or zero-argument
    factory returning one.

    Args:
        dotted_path: e.g. ``myapp.migrations:engine``.

    Raises:
        ImproperConfigurationError: If the object is not a migration engine.

    Returns:
        The engine.
    """
    from sqlmigrate.exceptions import ImproperConfigurationError
    from sqlmigrate.protocols import MigrationEngineProtocol
    from sqlmigrate.utils import module_loader

    engine = module_loader.import_string(dotted_path)
    if isinstance(engine, type) or (callable(engine) and not isinstance(engine, MigrationEngineProtocol)):
        engine = engine()
    if not isinstance(engine, MigrationEngineProtocol):
        msg = f"{dotted_path} is not a migration engine"
        raise ImproperConfigurationError(msg)
    return engine


def get_migrate_group() -> "Group":
    """Get the migrate CLI group.

    Raises:
        MissingDependencyError: If the `click` package is not installed.

    Returns:
        The migrate CLI group.
    """
    from sqlmigrate.__metadata__ import __version__

    click = _import_click()

    @click.group(name="migrate")
    @click.option(
        "--engine",
        "engine_path",
        help="Dotted path to a migration engine, or to a factory returning one (e.g. 'myapp.db:engine')",
        envvar="MIGRATE_ENGINE",
        type=str,
        default=None,
    )
    @click.option("--verbose", help="Print verbose logging.", type=bool, default=False, is_flag=True)
    @click.option(
        "--log-format",
        help="Format of log records.",
        type=click.Choice(["simple", "structured"]),
        default="simple",
        show_default=True,
    )
    @click.version_option(version=__version__, prog_name="migrate")
    @click.pass_context
    def migrate_group(ctx: "Context", engine_path: Optional[str], verbose: bool, log_format: str) -> None:
        """Create migration files and drive a migration engine."""
        from sqlmigrate.utils.logging import configure_logging

        configure_logging(level="DEBUG" if verbose else "WARNING", format_style=log_format)
        ctx.ensure_object(dict)
        ctx.obj["engine_path"] = engine_path
        ctx.obj["verbose"] = verbose

    return migrate_group


def add_migration_commands(migrate_group: Optional["Group"] = None) -> "Group":  # noqa: C901
    """Add migration commands to the migrate group.

    Args:
        migrate_group: The group to add the commands to.

    Raises:
        MissingDependencyError: If the `click` package is not installed.

    Returns:
        The group with the migration commands added.
    """
    from rich import get_console
    from rich.markup import escape

    click = _import_click()
    console = get_console()

    if migrate_group is None:
        migrate_group = get_migrate_group()

    def get_engine(ctx: "Context") -> "MigrationEngineProtocol":
        engine_path = ctx.obj.get("engine_path")
        if engine_path is None:
            console.print("[red]error: no migration engine configured, use --engine or MIGRATE_ENGINE[/]")
            ctx.exit(1)
        try:
            engine = load_engine(engine_path)
        except Exception as e:  # noqa: BLE001
            console.print(f"[red]Error loading engine:[/] {escape(str(e))}")
            ctx.exit(1)
        return engine

    def run_command(ctx: "Context", action: "Callable[[], T]", engine: "Optional[MigrationEngineProtocol]" = None) -> T:
        """Run a command, turning any failure into exit status 1."""
        start = time.perf_counter()
        try:
            result = action()
        except Exception as e:  # noqa: BLE001
            logger.debug("Command failed", exc_info=e)
            console.print(f"[red]error:[/] {escape(str(e))}")
            ctx.exit(1)
        finally:
            close = getattr(engine, "close", None)
            if callable(close):
                close()
        if ctx.obj.get("verbose"):
            logger.info("Finished after %.3fs", time.perf_counter() - start)
        return result

    def normalize_extension(ctx: "Context", param: "Parameter", value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return "." + value.lstrip(".")

    def get_commands(engine: "Optional[MigrationEngineProtocol]" = None) -> Any:
        from sqlmigrate.migrations.commands import MigrationCommands

        return MigrationCommands(engine=engine)

    @migrate_group.command(name="create", help="Create a set of timestamped up/down migrations titled NAME.")
    @click.argument("name")
    @click.option("--ext", "extension", required=True, help="File extension, e.g. sql", callback=normalize_extension)
    @click.option("--dir", "directory", default="", help="Directory to place the files in (default: current)")
    @click.option("--seq", is_flag=True, default=False, help="Use sequential numbers instead of timestamps")
    @click.option(
        "--digits", "seq_digits", type=int, default=DEFAULT_SEQ_DIGITS, show_default=True, help="Sequence width"
    )
    @click.option(
        "--format",
        "time_format",
        default=DEFAULT_TIME_FORMAT,
        show_default=True,
        help="strftime pattern, 'unix' or 'unixNano' for the timestamp prefix",
    )
    @click.option("--tz", "timezone", default=DEFAULT_TIMEZONE, show_default=True, help="Timezone of the timestamp")
    @click.pass_context
    def create_migration(  # pyright: ignore[reportUnusedFunction]
        ctx: "Context",
        name: str,
        extension: str,
        directory: str,
        seq: bool,
        seq_digits: int,
        time_format: str,
        timezone: str,
    ) -> None:
        """Create a new migration pair."""
        commands = get_commands()
        run_command(
            ctx,
            lambda: commands.create(
                name,
                directory=directory,
                extension=extension,
                seq=seq,
                seq_digits=seq_digits,
                time_format=time_format,
                timezone=timezone,
            ),
        )

    @migrate_group.command(name="goto", help="Migrate to version V.")
    @click.argument("version")
    @click.pass_context
    def goto_version(ctx: "Context", version: str) -> None:  # pyright: ignore[reportUnusedFunction]
        """Migrate to an exact version."""
        from sqlmigrate.migrations.arguments import parse_version_argument

        target = run_command(ctx, lambda: parse_version_argument(version))
        engine = get_engine(ctx)
        run_command(ctx, lambda: get_commands(engine).goto(target), engine)

    @migrate_group.command(name="up", help="Apply all or N up migrations.")
    @click.argument("args", nargs=-1)
    @click.pass_context
    def up_migrations(ctx: "Context", args: "tuple[str, ...]") -> None:  # pyright: ignore[reportUnusedFunction]
        """Apply pending migrations."""
        from sqlmigrate.migrations.arguments import parse_limit_argument

        limit = run_command(ctx, lambda: parse_limit_argument(args))
        engine = get_engine(ctx)
        run_command(ctx, lambda: get_commands(engine).up(limit), engine)

    @migrate_group.command(name="down", help="Apply all or N down migrations.")
    @click.argument("args", nargs=-1)
    @click.option("--all", "apply_all", is_flag=True, default=False, help="Apply all down migrations without asking")
    @click.pass_context
    def down_migrations(  # pyright: ignore[reportUnusedFunction]
        ctx: "Context", args: "tuple[str, ...]", apply_all: bool
    ) -> None:
        """Revert applied migrations."""
        from rich.prompt import Confirm

        from sqlmigrate.migrations.arguments import num_down_migrations_from_args

        count, needs_confirmation = run_command(ctx, lambda: num_down_migrations_from_args(apply_all, args))
        if needs_confirmation:
            if not Confirm.ask("Are you sure you want to apply all down migrations?", default=False):
                console.print("[red]Not applying all down migrations[/]")
                ctx.exit(1)
            console.print("[yellow]Applying all down migrations[/]")
        engine = get_engine(ctx)
        run_command(ctx, lambda: get_commands(engine).down(count), engine)

    @migrate_group.command(name="drop", help="Drop everything inside the database.")
    @click.option("-f", "--force", "no_prompt", is_flag=True, default=False, help="Do not ask for confirmation")
    @click.pass_context
    def drop_database(ctx: "Context", no_prompt: bool) -> None:  # pyright: ignore[reportUnusedFunction]
        """Drop everything the engine manages."""
        from rich.prompt import Confirm

        if not no_prompt:
            if not Confirm.ask("[bold red]Are you sure you want to drop the entire database schema?", default=False):
                console.print("[red]Aborted dropping the entire database schema[/]")
                ctx.exit(1)
            console.rule("[yellow]Dropping the entire database schema[/]", align="left")
        engine = get_engine(ctx)
        run_command(ctx, lambda: get_commands(engine).drop(), engine)

    @migrate_group.command(
        name="force",
        help="Set version V but don't run migration (ignores dirty state).",
        context_settings={"ignore_unknown_options": True},
    )
    @click.argument("version")
    @click.pass_context
    def force_version(ctx: "Context", version: str) -> None:  # pyright: ignore[reportUnusedFunction]
        """Force the recorded version."""
        from sqlmigrate.migrations.arguments import parse_force_version_argument

        target = run_command(ctx, lambda: parse_force_version_argument(version))
        engine = get_engine(ctx)
        run_command(ctx, lambda: get_commands(engine).force(target), engine)

    @migrate_group.command(name="version", help="Print current migration version.")
    @click.pass_context
    def show_version(ctx: "Context") -> None:  # pyright: ignore[reportUnusedFunction]
        """Print the current version."""
        engine = get_engine(ctx)
        run_command(ctx, lambda: get_commands(engine).version(), engine)

    return migrate_group
