"""Migration directory normalization."""

import posixpath

__all__ = ("normalize_directory",)


def normalize_directory(directory: str) -> str:
    """Normalize a migration directory into a path prefix.

    The path is cleaned lexically. The current directory becomes ``""``, the
    root stays ``"/"`` and every other path ends with exactly one ``/``.

    Args:
        directory: The directory as given by the user.

    Returns:
        The normalized directory prefix.
    """
    cleaned = posixpath.normpath(directory) if directory else "."
    # POSIX keeps a leading double slash.
    if cleaned.startswith("//"):
        cleaned = cleaned[1:]
    if cleaned == ".":
        return ""
    if cleaned == "/":
        return cleaned
    return f"{cleaned}/"
