#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/utils/encoding.py
"""Source decoding for Markdown input.

Markdown sources must be UTF-8 (a leading byte order mark is tolerated and
dropped). Anything else is rejected with :class:`DecodingError`; when chardet
can tell what the bytes probably are, the error says so, which is usually
enough for the user to re-save the file correctly.
"""

from __future__ import annotations

import logging
from typing import IO

from mdconvert.exceptions import DecodingError

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Guess the character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None when detection is not confident

    """
    import chardet

    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: no encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding %s (confidence %.2f)", encoding, confidence)
    if confidence < confidence_threshold:
        return None
    return encoding


def decode_source(data: bytes, source_name: str | None = None) -> str:
    """Decode Markdown source bytes as strict UTF-8.

    Parameters
    ----------
    data : bytes
        Raw source bytes, read in full
    source_name : str, optional
        File name used in the error message

    Returns
    -------
    str
        Decoded text with any UTF-8 byte order mark removed

    Raises
    ------
    DecodingError
        If the bytes are not valid UTF-8. ``byte_offset`` is the offset of
        the first offending byte in ``data``.

    Examples
    --------
    >>> decode_source("café".encode("utf-8"))
    'café'

    """
    bom_length = len(UTF8_BOM) if data.startswith(UTF8_BOM) else 0
    try:
        return data[bom_length:].decode("utf-8")
    except UnicodeDecodeError as exc:
        offset = exc.start + bom_length
        guess = detect_encoding(data)
        where = f" in {source_name}" if source_name else ""
        message = f"Invalid encoding{where}: byte 0x{data[offset]:02x} at offset {offset} is not valid UTF-8"
        if guess and guess.lower().replace("_", "-") not in ("utf-8", "ascii"):
            message += f" (the file looks like {guess})"
        raise DecodingError(message, byte_offset=offset, detected_encoding=guess, original_error=exc) from exc


def read_source_stream(stream: IO[bytes] | IO[str], source_name: str | None = None) -> str:
    """Read a whole stream and return its decoded text.

    Binary streams go through :func:`decode_source`; text streams are
    assumed to be decoded already.

    Raises
    ------
    DecodingError
        If a binary stream does not hold valid UTF-8
    TypeError
        If ``read()`` returns neither bytes nor str

    """
    content = stream.read()
    if isinstance(content, bytes):
        return decode_source(content, source_name=source_name)
    if isinstance(content, str):
        return content
    raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")
