"""JSON encoding used by the structured log formatter."""

from typing import Any, Literal, overload

import msgspec

__all__ = ("encode_json",)

_encoder = msgspec.json.Encoder()


@overload
def encode_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def encode_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def encode_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to JSON.

    Values msgspec cannot encode natively are rendered with ``str()``.

    Args:
        data: Data to encode.
        as_bytes: Return bytes instead of a string.

    Returns:
        JSON string or bytes.
    """
    try:
        encoded = _encoder.encode(data)
    except TypeError:
        encoded = msgspec.json.encode(data, enc_hook=str)
    return encoded if as_bytes else encoded.decode("utf-8")
