from sqlmigrate.cli import add_migration_commands


def run_cli() -> None:  # pragma: no cover
    """The main entrypoint to the migrate CLI."""
    cli = add_migration_commands()
    cli(prog_name="migrate")


if __name__ == "__main__":  # pragma: no cover
    run_cli()
