from typing import Final, TypedDict

from typing_extensions import NotRequired

__all__ = ("DEFAULT_EXTENSION", "DEFAULT_SEQ_DIGITS", "DEFAULT_TIMEZONE", "DEFAULT_TIME_FORMAT", "MigrationConfig")

DEFAULT_TIME_FORMAT: Final[str] = "%Y%m%d%H%M%S"
DEFAULT_SEQ_DIGITS: Final[int] = 6
DEFAULT_TIMEZONE: Final[str] = "UTC"
DEFAULT_EXTENSION: Final[str] = ".sql"


class MigrationConfig(TypedDict, total=False):
    """TypedDict for migration command settings.

    Explicit command arguments take precedence over these values.
    """

    directory: NotRequired[str]
    """Directory holding the migration files. Empty means the current directory."""
    extension: NotRequired[str]
    """File extension appended after the direction marker, e.g. ``.sql``."""
    seq: NotRequired[bool]
    """Number new migrations sequentially instead of by timestamp."""
    seq_digits: NotRequired[int]
    """Width of zero-padded sequence numbers."""
    time_format: NotRequired[str]
    """``unix``, ``unixNano`` or a ``strftime`` pattern for timestamp prefixes."""
    timezone: NotRequired[str]
    """IANA zone used for timestamp prefixes."""
    use_logger: NotRequired[bool]
    """Send command output to the logger instead of the console."""
    echo: NotRequired[bool]
    """Print command output to the console."""
