"""Conversions between UTF-8 and UTF-16LE byte strings."""


def utf16le_to_utf8(data: bytes) -> bytes:
    """Decode UTF-16LE bytes and re-encode them as UTF-8.

    A trailing odd byte is ignored. Unpaired surrogates raise
    ``UnicodeDecodeError`` (a ``ValueError``).
    """
    raw = bytes(data)
    even = len(raw) - len(raw) % 2
    return raw[:even].decode("utf-16-le").encode("utf-8")


def utf8_to_utf16le(data: bytes) -> bytes:
    """Decode UTF-8 bytes and re-encode them as UTF-16LE.

    Raises ``ValueError`` when the input is not valid UTF-8.
    """
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(f"input text is not UTF-8: {exc}") from exc
    return text.encode("utf-16-le")