"""
Byte/Text Codecs
Hex, base64 and UTF-8 conversions used at the edges of the analysis pipeline
"""

import base64
import binascii
import re
from typing import Optional

_BASE64_JUNK = re.compile(r'[^A-Za-z0-9+/=]')


def hex_to_bytes(hex_string: str) -> bytes:
    """Decode a hex string, ignoring surrounding whitespace"""
    return bytes.fromhex(hex_string.strip())


def bytes_to_hex(data: bytes) -> str:
    return data.hex()


def base64_to_bytes(text: str) -> bytes:
    """
    Decode base64, skipping newlines and any other non-alphabet characters

    Args:
        text: Base64 text, possibly wrapped across lines

    Returns:
        Decoded bytes
    """
    cleaned = _BASE64_JUNK.sub('', text)
    try:
        return base64.b64decode(cleaned)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 input: {e}") from e


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def hex_to_base64(hex_string: str) -> str:
    """Re-encode a hex string as base64"""
    return bytes_to_base64(hex_to_bytes(hex_string))


def to_text(data: bytes, encoding: str = 'utf-8') -> Optional[str]:
    """Decode bytes as text, or None if they are not valid in `encoding`"""
    try:
        return data.decode(encoding)
    except UnicodeDecodeError:
        return None
