"""Migration file management and lifecycle commands."""

from sqlmigrate.migrations.arguments import (
    DownArguments,
    num_down_migrations_from_args,
    parse_force_version_argument,
    parse_limit_argument,
    parse_version_argument,
)
from sqlmigrate.migrations.commands import MigrationCommands, format_version
from sqlmigrate.migrations.files import (
    MigrationFilePair,
    create_empty_file,
    ensure_directory,
    generate_migration_names,
)
from sqlmigrate.migrations.paths import normalize_directory
from sqlmigrate.migrations.sequence import find_migration_files, generate_timestamp_prefix, next_sequence

__all__ = (
    "DownArguments",
    "MigrationCommands",
    "MigrationFilePair",
    "create_empty_file",
    "ensure_directory",
    "find_migration_files",
    "format_version",
    "generate_migration_names",
    "generate_timestamp_prefix",
    "next_sequence",
    "normalize_directory",
    "num_down_migrations_from_args",
    "parse_force_version_argument",
    "parse_limit_argument",
    "parse_version_argument",
)
