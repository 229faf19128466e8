"""
ECB Detection
Flags ciphertexts with repeated blocks, the signature of ECB mode
"""

from collections import Counter
from typing import List, Sequence

from .cbc import BLOCK_SIZE


def count_repeated_blocks(data: bytes, block_size: int = BLOCK_SIZE) -> int:
    """Number of full blocks that duplicate an earlier block"""
    if block_size < 1:
        raise ValueError(f"block_size must be positive, got {block_size}")
    full = len(data) - len(data) % block_size
    counts = Counter(data[i:i + block_size] for i in range(0, full, block_size))
    return sum(n - 1 for n in counts.values())


def repeats_blocks(data: bytes, block_size: int = BLOCK_SIZE) -> bool:
    """True if any full block occurs more than once"""
    return count_repeated_blocks(data, block_size) > 0


def detect_ecb(ciphertexts: Sequence[bytes], block_size: int = BLOCK_SIZE) -> List[int]:
    """
    Find ciphertexts likely encrypted in ECB mode

    Args:
        ciphertexts: Candidate ciphertexts
        block_size: Cipher block size

    Returns:
        Indices of inputs containing repeated blocks
    """
    return [i for i, data in enumerate(ciphertexts) if repeats_blocks(data, block_size)]
