"""sqlmigrate: create migration files and drive a migration engine."""

from sqlmigrate import exceptions, migrations, protocols, utils
from sqlmigrate.__metadata__ import __version__
from sqlmigrate.config import MigrationConfig
from sqlmigrate.exceptions import NoChangeError, SQLMigrateError
from sqlmigrate.migrations.commands import MigrationCommands
from sqlmigrate.protocols import MigrationEngineProtocol

__all__ = (
    "MigrationCommands",
    "MigrationConfig",
    "MigrationEngineProtocol",
    "NoChangeError",
    "SQLMigrateError",
    "__version__",
    "exceptions",
    "migrations",
    "protocols",
    "utils",
)
