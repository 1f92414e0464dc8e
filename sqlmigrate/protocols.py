"""Runtime-checkable protocols for the collaborators sqlmigrate drives.

A migration engine is anything that implements :class:`MigrationEngineProtocol`.
Engines signal "nothing to do" by raising :class:`sqlmigrate.exceptions.NoChangeError`.
"""

from typing import Protocol, runtime_checkable

__all__ = ("MigrationEngineProtocol",)


@runtime_checkable
class MigrationEngineProtocol(Protocol):
    """Protocol for the migration engine behind the lifecycle commands."""

    def steps(self, n: int) -> None:
        """Apply ``n`` migrations; negative values step down."""
        ...

    def up(self) -> None:
        """Apply all pending up migrations."""
        ...

    def down(self) -> None:
        """Apply all down migrations."""
        ...

    def migrate(self, version: int) -> None:
        """Migrate up or down to an exact version."""
        ...

    def force(self, version: int) -> None:
        """Set the recorded version without running migrations and clear the dirty flag."""
        ...

    def drop(self) -> None:
        """Drop everything managed by the engine."""
        ...

    def version(self) -> "tuple[int, bool]":
        """Return the current version and whether it is dirty."""
        ...
