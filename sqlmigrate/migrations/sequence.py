"""Migration prefix generation.

New migrations are prefixed either with the next zero-padded sequence number or
with a token derived from the creation time.
"""

import glob
import os
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Final

from sqlmigrate.exceptions import (
    InvalidInputError,
    MalformedMigrationNameError,
    NonNumericTokenError,
    NonPositiveSequenceError,
    SequenceOverflowError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = (
    "UNIX_FORMAT",
    "UNIX_NANO_FORMAT",
    "find_migration_files",
    "generate_timestamp_prefix",
    "next_sequence",
)

UNIX_FORMAT: Final[str] = "unix"
UNIX_NANO_FORMAT: Final[str] = "unixNano"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def find_migration_files(directory: str, extension: str) -> "list[str]":
    """List the migration files in ``directory`` ending with ``extension``.

    Args:
        directory: Normalized migration directory, ``""`` for the current one.
        extension: File extension to match.

    Returns:
        Matching paths sorted lexicographically.
    """
    pattern = "*" + glob.escape(extension)
    base = Path(directory) if directory else Path()
    return sorted(os.path.join(directory, path.name) for path in base.glob(pattern))


def next_sequence(matches: "Sequence[str]", seq_digits: int) -> str:
    """Compute the next zero-padded sequence number.

    Only the last entry of ``matches`` is inspected, so the caller must pass
    them sorted with the highest sequence last. Zero-padded names sorted
    lexicographically satisfy this, which is what :func:`find_migration_files`
    returns.

    Args:
        matches: Existing migration filenames, sorted.
        seq_digits: Width of the sequence number.

    Raises:
        InvalidInputError: If ``seq_digits`` is not positive.
        MalformedMigrationNameError: If the last filename has no ``prefix_`` part.
        NonNumericTokenError: If the prefix is not an integer.
        NonPositiveSequenceError: If the next number is not positive.
        SequenceOverflowError: If the next number has more than ``seq_digits`` digits.

    Returns:
        The next sequence number, left-padded with zeros.
    """
    if seq_digits <= 0:
        msg = "Digits must be positive"
        raise InvalidInputError(msg)

    next_seq = 1
    if matches:
        full_path = matches[-1]
        filename = os.path.basename(full_path)
        idx = filename.find("_")
        if idx < 1:
            raise MalformedMigrationNameError(full_path)
        token = filename[:idx]
        if not _INTEGER_RE.fullmatch(token):
            raise NonNumericTokenError(token, full_path)
        next_seq = int(token) + 1

    if next_seq <= 0:
        raise NonPositiveSequenceError

    next_seq_str = str(next_seq)
    if len(next_seq_str) > seq_digits:
        raise SequenceOverflowError(next_seq, seq_digits)
    return next_seq_str.rjust(seq_digits, "0")


def generate_timestamp_prefix(start_time: datetime, time_format: str) -> str:
    """Render ``start_time`` as a migration prefix.

    Args:
        start_time: Creation time. Naive values are treated as UTC.
        time_format: ``unix``, ``unixNano`` or a ``strftime`` pattern.

    Raises:
        InvalidInputError: If ``time_format`` is empty.

    Returns:
        The prefix.
    """
    if not time_format:
        msg = "Time format may not be empty"
        raise InvalidInputError(msg)
    if time_format in {UNIX_FORMAT, UNIX_NANO_FORMAT}:
        if start_time.tzinfo is None:
            start_time = start_time.replace(tzinfo=timezone.utc)
        elapsed = start_time - _EPOCH
        if time_format == UNIX_FORMAT:
            return str(elapsed // timedelta(seconds=1))
        return str((elapsed // timedelta(microseconds=1)) * 1000)
    return start_time.strftime(time_format)
