"""Migration command implementations for sqlmigrate.

This module provides the command interface behind the ``migrate`` CLI. Each
lifecycle command validates its input and delegates to an injected migration
engine.
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone, tzinfo
from typing import TYPE_CHECKING, Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rich.console import Console

from sqlmigrate.config import (
    DEFAULT_EXTENSION,
    DEFAULT_SEQ_DIGITS,
    DEFAULT_TIME_FORMAT,
    DEFAULT_TIMEZONE,
    MigrationConfig,
)
from sqlmigrate.exceptions import (
    ConflictingFlagsError,
    ImproperConfigurationError,
    InvalidInputError,
    NoChangeError,
)
from sqlmigrate.migrations.files import (
    MigrationFilePair,
    create_empty_file,
    ensure_directory,
    generate_migration_names,
)
from sqlmigrate.migrations.paths import normalize_directory
from sqlmigrate.migrations.sequence import find_migration_files, generate_timestamp_prefix, next_sequence
from sqlmigrate.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from sqlmigrate.protocols import MigrationEngineProtocol

__all__ = ("MigrationCommands", "format_version")

logger = get_logger("migrations.commands")
console = Console()


def format_version(version: int, dirty: bool) -> str:
    """Render an engine version for display."""
    if dirty:
        return f"{version} (dirty)"
    return str(version)


class MigrationCommands:
    """Lifecycle commands over a migration engine.

    The engine is only needed by the engine-backed commands, so ``create`` works
    without one.
    """

    __slots__ = ("_engine", "migration_config")

    def __init__(
        self, engine: "Optional[MigrationEngineProtocol]" = None, migration_config: "Optional[MigrationConfig]" = None
    ) -> None:
        self._engine = engine
        self.migration_config: MigrationConfig = migration_config if migration_config is not None else {}

    @property
    def engine(self) -> "MigrationEngineProtocol":
        """The configured engine.

        Raises:
            ImproperConfigurationError: If no engine was provided.
        """
        if self._engine is None:
            msg = "No migration engine configured. Pass an engine or use the --engine option."
            raise ImproperConfigurationError(msg)
        return self._engine

    def _output_info(self, message: str, *args: Any, rich_message: "Optional[str]" = None) -> None:
        if self.migration_config.get("use_logger", False):
            logger.info(message, *args)
            return
        if not self.migration_config.get("echo", True):
            return
        console.print(rich_message or (message % args if args else message))

    def _log_summary(self, command: str, status: str, start: float, **extra_fields: Any) -> None:
        """Emit a single summary log entry when output is routed to the logger."""
        if not self.migration_config.get("use_logger", False):
            return
        duration_ms = int((time.perf_counter() - start) * 1000)
        level = logging.ERROR if status == "failed" else logging.INFO
        log_with_context(
            logger,
            level,
            "migration.command.summary",
            command=command,
            status=status,
            duration_ms=duration_ms,
            **extra_fields,
        )

    def _run_engine_command(self, command: str, operation: "Callable[[], None]", **extra_fields: Any) -> bool:
        """Run an engine operation, downgrading ``NoChangeError`` to a message.

        Returns:
            ``False`` if the engine reported no change, ``True`` otherwise.
        """
        start = time.perf_counter()
        try:
            operation()
        except NoChangeError as e:
            self._log_summary(command, "no_change", start, **extra_fields)
            self._output_info("%s", e.detail, rich_message=f"[yellow]{e.detail}[/]")
            return False
        except Exception as e:
            self._log_summary(command, "failed", start, error_type=type(e).__name__, **extra_fields)
            raise
        self._log_summary(command, "complete", start, **extra_fields)
        return True

    def create(
        self,
        name: str,
        *,
        directory: "Optional[str]" = None,
        extension: "Optional[str]" = None,
        seq: "Optional[bool]" = None,
        seq_digits: "Optional[int]" = None,
        time_format: "Optional[str]" = None,
        timezone: "Optional[str]" = None,
        start_time: "Optional[datetime]" = None,
    ) -> MigrationFilePair:
        """Create an empty up/down migration pair.

        Args:
            name: Migration name placed after the prefix.
            directory: Target directory, created if missing.
            extension: File extension such as ``.sql``.
            seq: Use sequence numbers instead of timestamps.
            seq_digits: Width of the zero-padded sequence number.
            time_format: ``unix``, ``unixNano`` or a ``strftime`` pattern.
            timezone: IANA zone for the creation time.
            start_time: Creation time. Defaults to now.

        Raises:
            ConflictingFlagsError: If ``seq`` is combined with a custom time format.
            InvalidInputError: If the digits, format or timezone are invalid.
            MigrationFileError: If the directory or a file cannot be created.

        Returns:
            The created file paths.
        """
        config = self.migration_config
        directory = normalize_directory(directory if directory is not None else config.get("directory", ""))
        extension = extension if extension is not None else config.get("extension", DEFAULT_EXTENSION)
        seq = seq if seq is not None else config.get("seq", False)
        seq_digits = seq_digits if seq_digits is not None else config.get("seq_digits", DEFAULT_SEQ_DIGITS)
        time_format = time_format if time_format is not None else config.get("time_format", DEFAULT_TIME_FORMAT)

        if seq and time_format != DEFAULT_TIME_FORMAT:
            msg = "The seq and format options are mutually exclusive"
            raise ConflictingFlagsError(msg)

        if seq:
            if seq_digits <= 0:
                msg = "Digits must be positive"
                raise InvalidInputError(msg)
            prefix = next_sequence(find_migration_files(directory, extension), seq_digits)
        else:
            if start_time is None:
                zone = _resolve_timezone(timezone or config.get("timezone", DEFAULT_TIMEZONE))
                start_time = datetime.now(tz=zone)
            prefix = generate_timestamp_prefix(start_time, time_format)

        ensure_directory(directory)
        files = generate_migration_names(directory, prefix, name, extension)
        create_empty_file(files.up)
        create_empty_file(files.down)

        log_with_context(logger, logging.INFO, "migration.created", up=files.up, down=files.down, prefix=prefix)
        self._output_info(
            "Created %s and %s",
            files.up,
            files.down,
            rich_message=f"[green]Created {files.up}[/]\n[green]Created {files.down}[/]",
        )
        return files

    def goto(self, version: int) -> bool:
        """Migrate to an exact version."""
        engine = self.engine
        return self._run_engine_command("goto", lambda: engine.migrate(version), version=version)

    def up(self, limit: int = -1) -> bool:
        """Apply pending migrations.

        Args:
            limit: Maximum number of migrations to apply, negative for all.

        Returns:
            ``False`` if there was nothing to apply.
        """
        engine = self.engine
        if limit >= 0:
            return self._run_engine_command("up", lambda: engine.steps(limit), limit=limit)
        return self._run_engine_command("up", engine.up, limit=limit)

    def down(self, limit: int = -1) -> bool:
        """Revert applied migrations.

        Args:
            limit: Maximum number of migrations to revert, negative for all.

        Returns:
            ``False`` if there was nothing to revert.
        """
        engine = self.engine
        if limit >= 0:
            return self._run_engine_command("down", lambda: engine.steps(-limit), limit=limit)
        return self._run_engine_command("down", engine.down, limit=limit)

    def drop(self) -> bool:
        """Drop everything the engine manages. Callers confirm beforehand."""
        return self._run_engine_command("drop", self.engine.drop)

    def force(self, version: int) -> bool:
        """Set the recorded version without running migrations."""
        engine = self.engine
        return self._run_engine_command("force", lambda: engine.force(version), version=version)

    def version(self) -> "tuple[int, bool]":
        """Report the current version and dirty flag."""
        current, dirty = self.engine.version()
        rendered = format_version(current, dirty)
        style = "red" if dirty else "green"
        self._output_info("%s", rendered, rich_message=f"[{style}]{rendered}[/]")
        return current, dirty


def _resolve_timezone(name: str) -> "tzinfo":
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        msg = f"Unknown timezone: {name}"
        raise InvalidInputError(msg) from e
