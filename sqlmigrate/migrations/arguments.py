"""Interpretation of positional command arguments.

These helpers turn the raw strings a user typed after ``up``, ``down``,
``goto`` and ``force`` into the integers the engine expects.
"""

import re
from typing import TYPE_CHECKING, NamedTuple

from sqlmigrate.exceptions import (
    ConflictingFlagsError,
    InvalidInputError,
    NonNumericArgumentError,
    TooManyArgumentsError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = (
    "DownArguments",
    "num_down_migrations_from_args",
    "parse_force_version_argument",
    "parse_limit_argument",
    "parse_version_argument",
)

_UNSIGNED_RE = re.compile(r"[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")


class DownArguments(NamedTuple):
    """Normalized arguments of the ``down`` command."""

    count: int
    """Number of migrations to revert, ``-1`` for all of them."""
    needs_confirmation: bool
    """Whether the user must confirm before reverting."""


def _parse_unsigned(value: str, message: str) -> int:
    if not _UNSIGNED_RE.fullmatch(value):
        raise NonNumericArgumentError(message, value)
    return int(value)


def num_down_migrations_from_args(apply_all: bool, args: "Sequence[str]") -> DownArguments:
    """Reduce the ``down`` arguments to a step count.

    Omitting the count reverts everything but requires confirmation, while
    ``--all`` reverts everything without asking.

    Args:
        apply_all: Whether ``--all`` was given.
        args: Positional arguments after ``down``.

    Raises:
        ConflictingFlagsError: If ``--all`` is combined with a count.
        NonNumericArgumentError: If the count is not a non-negative integer.
        TooManyArgumentsError: If more than one count is given.

    Returns:
        The step count and whether confirmation is required.
    """
    if apply_all:
        if args:
            msg = "-all cannot be used with other arguments"
            raise ConflictingFlagsError(msg)
        return DownArguments(-1, False)

    if not args:
        return DownArguments(-1, True)
    if len(args) == 1:
        return DownArguments(_parse_unsigned(args[0], "can't read limit argument N"), False)
    raise TooManyArgumentsError


def parse_limit_argument(args: "Sequence[str]") -> int:
    """Parse the optional ``N`` of ``up [N]``.

    Returns:
        ``-1`` when omitted, otherwise the parsed limit.
    """
    if not args:
        return -1
    if len(args) > 1:
        raise TooManyArgumentsError
    return _parse_unsigned(args[0], "can't read limit argument N")


def parse_version_argument(value: str) -> int:
    """Parse the ``V`` of ``goto V``."""
    return _parse_unsigned(value, "can't read version argument V")


def parse_force_version_argument(value: str) -> int:
    """Parse the ``V`` of ``force V``.

    ``-1`` is accepted and stands for "no version".

    Raises:
        NonNumericArgumentError: If ``value`` is not an integer.
        InvalidInputError: If ``value`` is below ``-1``.
    """
    if not _SIGNED_RE.fullmatch(value):
        msg = "can't read version argument V"
        raise NonNumericArgumentError(msg, value)
    version = int(value)
    if version < -1:
        msg = "argument V must be >= -1"
        raise InvalidInputError(msg)
    return version
