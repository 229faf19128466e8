"""
Byte Utilities
XOR helpers, Hamming distance and block slicing shared by every analysis module
"""

from itertools import cycle
from typing import List

from .errors import InvalidLengthError, LengthMismatchError


def xor_scalar(data: bytes, key: int) -> bytes:
    """
    XOR every byte with a single key byte

    Args:
        data: Input bytes
        key: Key byte (0-255)

    Returns:
        XOR'd bytes of the same length
    """
    if not 0 <= key <= 255:
        raise ValueError(f"Key byte out of range: {key}")
    return bytes(b ^ key for b in data)


def xor_sequence(data: bytes, key_bytes: bytes, repeating: bool = False) -> bytes:
    """
    XOR data against a byte sequence

    In fixed mode both operands must have the same length. In repeating
    mode the key is cycled to cover the data.

    Args:
        data: Input bytes
        key_bytes: Key bytes
        repeating: Cycle the key instead of requiring equal lengths

    Returns:
        XOR'd bytes, same length as data
    """
    if not key_bytes:
        raise InvalidLengthError("XOR key must not be empty")

    if repeating:
        return bytes(a ^ b for a, b in zip(data, cycle(key_bytes)))

    if len(data) != len(key_bytes):
        raise InvalidLengthError(
            f"Fixed XOR needs equal lengths, got {len(data)} and {len(key_bytes)}"
        )
    return bytes(a ^ b for a, b in zip(data, key_bytes))


def fixed_xor(a: bytes, b: bytes) -> bytes:
    """XOR two equal-length byte strings"""
    return xor_sequence(a, b)


def repeating_key_xor(data: bytes, key: bytes) -> bytes:
    """XOR data with a key repeated to its length"""
    return xor_sequence(data, key, repeating=True)


def hamming_distance(a: bytes, b: bytes) -> int:
    """
    Count differing bits between two equal-length byte strings

    Args:
        a: First byte string
        b: Second byte string

    Returns:
        Number of bit positions that differ
    """
    if len(a) != len(b):
        raise LengthMismatchError(
            f"Hamming distance needs equal lengths, got {len(a)} and {len(b)}"
        )
    return sum(bin(x ^ y).count('1') for x, y in zip(a, b))


def chunks(data: bytes, size: int) -> List[bytes]:
    """Split data into consecutive chunks; the last one may be shorter"""
    if size < 1:
        raise ValueError(f"Chunk size must be positive: {size}")
    return [data[i:i + size] for i in range(0, len(data), size)]


def transpose(data: bytes, size: int) -> List[bytes]:
    """
    Build one column per key position from the full-length chunks

    A trailing partial chunk is left out so all columns have equal length.

    Args:
        data: Input bytes
        size: Chunk (key) size

    Returns:
        List of `size` columns; column j holds byte j of every full chunk
    """
    if size < 1:
        raise ValueError(f"Chunk size must be positive: {size}")
    usable = len(data) - len(data) % size
    return [data[j:usable:size] for j in range(size)]
