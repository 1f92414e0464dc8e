"""Migration file naming and creation."""

import os
from pathlib import Path
from typing import NamedTuple

from sqlmigrate.exceptions import MigrationFileError
from sqlmigrate.utils.logging import get_logger

__all__ = ("MigrationFilePair", "create_empty_file", "ensure_directory", "generate_migration_names")

logger = get_logger("migrations.files")


class MigrationFilePair(NamedTuple):
    """Paths of the up and down files of one migration."""

    up: str
    down: str


def generate_migration_names(directory: str, prefix: str, name: str, extension: str) -> MigrationFilePair:
    """Build the up and down paths for a migration.

    ``name`` and ``extension`` are used verbatim.

    Args:
        directory: Normalized migration directory.
        prefix: Sequence number or timestamp token.
        name: Human readable migration name.
        extension: File extension, e.g. ``.sql``.

    Returns:
        The ``{prefix}_{name}.up{ext}`` and ``{prefix}_{name}.down{ext}`` paths.
    """
    base = os.path.join(directory, f"{prefix}_{name}")
    return MigrationFilePair(up=f"{base}.up{extension}", down=f"{base}.down{extension}")


def ensure_directory(directory: str) -> None:
    """Create ``directory`` and its parents if missing.

    Raises:
        MigrationFileError: If the directory cannot be created.
    """
    if not directory:
        return
    try:
        Path(directory).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MigrationFileError(directory, e.strerror or e) from e


def create_empty_file(path: str) -> None:
    """Create an empty file at ``path``, truncating any existing content.

    Raises:
        MigrationFileError: If the file cannot be created or closed.
    """
    try:
        with open(path, "w", encoding="utf-8"):
            pass
    except OSError as e:
        raise MigrationFileError(path, e.strerror or e) from e
    logger.debug("Created migration file %s", path)
